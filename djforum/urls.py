from django.urls import path

from djforum import views


app_name = 'djforum'

urlpatterns = [
    path('', views.index, name='index'),
    path('maintenance/', views.maintenance, name='maintenance'),
    path('ban/', views.ban, name='ban'),
    path('profile/details/', views.profile_details, name='profile-details'),
    path('admin/settings/', views.settings, name='settings'),
    path('install/level-up/', views.level_up, name='level-up'),
]
