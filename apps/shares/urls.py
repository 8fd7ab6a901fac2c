from django.urls import path
from . import views

app_name = 'shares'

urlpatterns = [
    # Admin ledger
    path('shares/', views.share_purchases, name='share-list'),
    path('shares/stats/', views.share_stats, name='share-stats'),
    path('shares/monthly/<int:month>/<int:year>/', views.month_statistics, name='month-statistics'),
    path('shares/available-months/', views.available_months, name='available-months'),

    # Per-member (admin)
    path('shares/member/<uuid:user_id>/', views.member_shares_by_id, name='member-shares'),
    path('shares/member/<uuid:user_id>/monthly/', views.member_monthly_shares_by_id, name='member-monthly-shares'),

    # Current member
    path('member/shares/', views.my_shares, name='my-shares'),
    path('member/shares/monthly/', views.my_monthly_shares, name='my-monthly-shares'),
]
