from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),
    
    # User profile
    path('me/', views.get_current_user, name='current-user'),
]
