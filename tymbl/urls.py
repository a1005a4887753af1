# tymbl/urls.py
from django.urls import path, include
from django.views.generic import TemplateView

urlpatterns = [
    # Home
    path('', TemplateView.as_view(template_name='home.html'), name='home'),

    # Referral listing, search and detail pages
    path('', include('referrals.urls', namespace='referrals')),
]
