# referrals/catalogue.py
"""
Static referral / company catalogue served by the listing and detail pages.
"""
from dataclasses import dataclass, field

from django.http import Http404

from seo.slugs import build_company_path, build_job_details_path


@dataclass(frozen=True)
class Company:
    id: int
    name: str
    description: str = ''
    website: str = ''

    @property
    def seo_path(self):
        return build_company_path(self.name, self.id)


@dataclass(frozen=True)
class Referral:
    id: int
    title: str
    company_id: int
    city: str = ''
    country: str = ''
    min_experience: int = 0
    max_experience: int = 0
    skills: tuple = field(default_factory=tuple)
    description: str = ''

    @property
    def company(self):
        return get_company(self.company_id)

    @property
    def location(self):
        return ', '.join(p for p in (self.city, self.country) if p)

    @property
    def seo_path(self):
        return build_job_details_path(
            self.title, self.city, self.country, self.company.name,
            self.min_experience, self.max_experience, self.id,
        )


COMPANIES = [
    Company(1, 'Google', 'A multinational technology company that specializes in Internet-related services and products.', 'https://www.google.com'),
    Company(2, 'Amazon', 'An American multinational technology company focusing on e-commerce, cloud computing and digital streaming.', 'https://www.amazon.com'),
    Company(3, 'Microsoft', 'Developer of Windows, Office and the Azure cloud platform.', 'https://www.microsoft.com'),
    Company(4, 'Infosys', 'Indian multinational IT services and consulting company.', 'https://www.infosys.com'),
    Company(5, 'Spotify', 'Audio streaming and media services provider.', 'https://www.spotify.com'),
    Company(6, 'Flipkart', 'Indian e-commerce company.', 'https://www.flipkart.com'),
]

REFERRALS = [
    Referral(1, 'Senior Engineer', 1, 'Bangalore', 'India', 5, 10, ('python', 'distributed systems', 'go')),
    Referral(2, 'Data Scientist', 2, 'Pune', 'India', 2, 6, ('python', 'machine learning', 'sql')),
    Referral(3, 'Frontend Developer', 3, 'Hyderabad', 'India', 1, 4, ('react', 'typescript', 'css')),
    Referral(4, 'Software Engineer', 4, 'Pune', 'India', 0, 0, ('java', 'spring')),
    Referral(5, 'Backend Engineer', 5, 'Stockholm', 'Sweden', 3, 8, ('java', 'kafka', 'gcp')),
    Referral(6, 'Data Analyst', 6, 'Bangalore', 'India', 0, 2, ('sql', 'excel', 'tableau')),
    Referral(7, 'Senior Data Scientist', 1, 'London', 'United Kingdom', 6, 12, ('python', 'statistics')),
    Referral(8, 'DevOps Engineer', 2, '', 'India', 3, 7, ('aws', 'kubernetes', 'terraform')),
]

_COMPANIES_BY_ID = {c.id: c for c in COMPANIES}
_REFERRALS_BY_ID = {r.id: r for r in REFERRALS}


def get_company(company_id):
    try:
        return _COMPANIES_BY_ID[company_id]
    except KeyError:
        raise Http404("Company not found.")


def get_referral(referral_id):
    try:
        return _REFERRALS_BY_ID[referral_id]
    except KeyError:
        raise Http404("Referral not found.")


def referrals_for_company(company_id):
    return [r for r in REFERRALS if r.company_id == company_id]


def known_locations():
    """
    Distinct (city, country) pairs, used to resolve slug locations.
    """
    seen = []
    for r in REFERRALS:
        pair = (r.city, r.country)
        if pair not in seen:
            seen.append(pair)
    return seen
