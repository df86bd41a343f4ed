"""
URL configuration for the picshare project.

The user and follow-graph API lives under /api/v1/users/; allauth provides
login, signup and the Facebook/Google OAuth callbacks under /accounts/.
"""
from django.contrib import admin
from django.urls import path, include
from users import views

api_patterns = [
    path('signup/', views.signup, name='signup'),
    path('me/', views.me, name='me'),
    path('search/', views.search, name='user_search'),
    path('profile/', views.profile, name='profile'),
    path('profile/<int:user_id>/', views.profile_by_id, name='profile_by_id'),
    path('profile-photo/', views.set_profile_photo, name='set_profile_photo'),
    path('profile-photo/<int:user_id>/', views.get_profile_photo, name='get_profile_photo'),
    path('<int:user_id>/follow/', views.follow, name='follow'),
    path('<int:user_id>/unfollow/', views.unfollow, name='unfollow'),
    path('<int:user_id>/cancel/', views.cancel_request, name='cancel_request'),
    path('<int:user_id>/approve/', views.approve, name='approve'),
    path('<int:user_id>/refuse/', views.refuse, name='refuse'),
    path('<int:user_id>/is-following/', views.is_following, name='is_following'),
    path('<int:user_id>/following/', views.following_list, name='following_list'),
    path('<int:user_id>/follower/', views.follower_list, name='follower_list'),
    path('<int:user_id>/waiting/', views.waiting_list, name='waiting_list'),
    path('<int:user_id>/counts/', views.counts, name='counts'),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('allauth.urls')),
    path('api/v1/users/', include(api_patterns)),
]
