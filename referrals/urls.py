# referrals/urls.py
from django.urls import path, re_path
from . import views

app_name = 'referrals'

urlpatterns = [
    # listing; SEO slugs such as /python-jobs-in-pune are rewritten onto it
    re_path(r'^referrals/?$', views.referral_list, name='referral_list'),
    path('referrals/<int:referral_id>/', views.referral_detail, name='referral_detail'),   # /referrals/12/
    path('companies/<int:company_id>/', views.company_detail, name='company_detail'),     # /companies/3/

    # search form -> canonical slug URL
    re_path(r'^search-referrals/?$', views.search, name='search'),
]
