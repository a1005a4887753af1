# referrals/forms.py
from django import forms
from django.core.exceptions import ValidationError

from seo.slugs import SearchFilters

from .search import parse_years

MAX_EXPERIENCE_YEARS = 50


class ReferralSearchForm(forms.Form):
    """
    Search criteria from the search page / home page widget.
    Every field is optional; no criteria at all lands on the plain listing.
    """
    keyword = forms.CharField(required=False, max_length=100, help_text="Job title, skill or company")
    country = forms.CharField(required=False, max_length=100)
    city = forms.CharField(required=False, max_length=100)
    experience = forms.CharField(required=False, max_length=2, help_text="Years of experience")

    def clean_experience(self):
        value = (self.cleaned_data.get('experience') or '').strip()
        if not value:
            return ''
        years = parse_years(value)
        if years is None:
            raise ValidationError("Experience must be a whole number of years.")
        if years > MAX_EXPERIENCE_YEARS:
            raise ValidationError(f"Experience cannot be more than {MAX_EXPERIENCE_YEARS} years.")
        return str(years)

    def to_filters(self):
        data = self.cleaned_data
        return SearchFilters(
            keyword=data.get('keyword', '').strip(),
            country=data.get('country', '').strip(),
            city=data.get('city', '').strip(),
            experience=data.get('experience', ''),
        )
