# referrals/tests.py
import json
from unittest import mock

from django.test import Client, SimpleTestCase, override_settings
from django.urls import reverse

from seo.slugs import SearchFilters

from .catalogue import REFERRALS, get_referral
from .forms import ReferralSearchForm
from .search import (
    filters_for_listing, matches_experience, matches_keyword, parse_years, resolve_location,
    search_referrals,
)


def _ids(referrals):
    return [r.id for r in referrals]


class SearchTest(SimpleTestCase):
    def test_resolve_location(self):
        self.assertEqual(resolve_location('bangalore'), ('Bangalore', ''))
        self.assertEqual(resolve_location('bangalore-india'), ('Bangalore', 'India'))
        self.assertEqual(resolve_location('india'), ('', 'India'))
        self.assertEqual(resolve_location('atlantis'), ('', 'Atlantis'))
        self.assertEqual(resolve_location(''), ('', ''))

    def test_filters_from_seo_tag_and_explicit_params(self):
        filters = filters_for_listing('data-scientist-jobs-in-pune', {'experience': '3'})
        self.assertEqual(filters, SearchFilters(keyword='Data Scientist', city='Pune', experience='3'))

        filters = filters_for_listing('python-jobs', {'keyword': 'Java'})
        self.assertEqual(filters.keyword, 'Java')

        self.assertEqual(filters_for_listing('', {}), SearchFilters())

    def test_keyword_matching(self):
        referral = get_referral(2)
        self.assertTrue(matches_keyword(referral, 'Data Scientist'))
        self.assertTrue(matches_keyword(referral, 'amazon'))
        self.assertTrue(matches_keyword(referral, 'machine learning'))
        self.assertTrue(matches_keyword(referral, ''))
        self.assertFalse(matches_keyword(referral, 'xylophone'))

    def test_search_by_location_and_experience(self):
        pune = _ids(search_referrals(SearchFilters(city='Pune')))
        self.assertEqual(sorted(pune), [2, 4])

        india_fresher = _ids(search_referrals(SearchFilters(country='India', experience='0')))
        self.assertIn(4, india_fresher)
        self.assertIn(6, india_fresher)
        self.assertNotIn(1, india_fresher)

        self.assertEqual(len(search_referrals(SearchFilters())), len(REFERRALS))

    def test_experience_must_be_ascii_digits(self):
        self.assertEqual(parse_years(' 7 '), 7)
        self.assertIsNone(parse_years('\u00b2'))
        self.assertIsNone(parse_years('-1'))
        self.assertIsNone(parse_years(''))
        self.assertTrue(matches_experience(get_referral(1), '\u00b2'))
        self.assertFalse(matches_experience(get_referral(1), '4'))

    def test_search_keyword_and_city(self):
        results = _ids(search_referrals(SearchFilters(keyword='Data Scientist', city='Pune')))
        self.assertIn(2, results)
        self.assertNotIn(4, results)


class SearchFormTest(SimpleTestCase):
    def test_valid(self):
        form = ReferralSearchForm(data={'keyword': ' Data Scientist ', 'city': 'Pune', 'experience': '03'})
        self.assertTrue(form.is_valid())
        self.assertEqual(
            form.to_filters(),
            SearchFilters(keyword='Data Scientist', city='Pune', experience='3'),
        )

    def test_experience_validation(self):
        self.assertFalse(ReferralSearchForm(data={'experience': 'ten'}).is_valid())
        self.assertFalse(ReferralSearchForm(data={'experience': '99'}).is_valid())
        form = ReferralSearchForm(data={'experience': '\u00b2'})
        self.assertFalse(form.is_valid())
        self.assertIn('experience', form.errors)
        self.assertTrue(ReferralSearchForm(data={}).is_valid())


@override_settings(SITE_URL='https://tymblhub.com')
class ViewsTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()

    def test_home(self):
        resp = self.client.get('/')
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, reverse('referrals:search'))

    def test_plain_listing(self):
        resp = self.client.get(reverse('referrals:referral_list'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.context['referrals']), len(REFERRALS))
        self.assertEqual(resp.context['metadata']['title'], 'Referrals | TymblHub')
        self.assertContains(resp, '<link rel="canonical" href="https://tymblhub.com/referrals">', html=False)

    def test_seo_slug_is_rewritten_to_listing(self):
        resp = self.client.get('/data-scientist-jobs-in-pune', {'experience': '3'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.wsgi_request.path, '/data-scientist-jobs-in-pune')
        self.assertEqual(resp.context['seo_slug'], 'data-scientist-jobs-in-pune')
        self.assertEqual(resp.context['filters'], SearchFilters(keyword='Data Scientist', city='Pune', experience='3'))
        self.assertIn(2, _ids(resp.context['referrals']))
        self.assertEqual(resp.context['metadata']['title'], 'Data Scientist Jobs in Pune | TymblHub')
        self.assertContains(resp, 'https://tymblhub.com/data-scientist-jobs-in-pune')

    def test_location_only_slug(self):
        resp = self.client.get('/jobs-in-bangalore')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(sorted(_ids(resp.context['referrals'])), [1, 6])

    def test_listing_json_ld(self):
        resp = self.client.get('/jobs-in-pune')
        item_list = json.loads(resp.context['metadata']['item_list_json'])
        self.assertEqual(item_list['@type'], 'ItemList')
        self.assertEqual(item_list['numberOfItems'], 2)
        urls = [item['url'] for item in item_list['itemListElement']]
        self.assertIn('https://tymblhub.com' + get_referral(2).seo_path, urls)

    def test_invalid_seo_tag_is_ignored(self):
        resp = self.client.get(reverse('referrals:referral_list'), {'seo': 'about-us'})
        self.assertEqual(resp.context['seo_slug'], '')
        self.assertEqual(resp.context['metadata']['title'], 'Referrals | TymblHub')

    def test_bad_page_numbers(self):
        url = reverse('referrals:referral_list')
        self.assertEqual(self.client.get(url, {'page': 'abc'}).context['page_obj'].number, 1)
        self.assertEqual(self.client.get(url, {'page': '99'}).context['page_obj'].number, 1)

    def test_unknown_root_path_is_404(self):
        self.assertEqual(self.client.get('/about-us').status_code, 404)
        self.assertEqual(self.client.get('/foo/bar-jobs').status_code, 404)

    def test_search_redirects_to_canonical_slug(self):
        url = reverse('referrals:search')
        resp = self.client.post(url, {'keyword': 'Data Scientist', 'city': 'Pune', 'experience': '3'})
        self.assertRedirects(resp, '/data-scientist-jobs-in-pune?experience=3', fetch_redirect_response=False)

        resp = self.client.post(url, {'country': 'India', 'city': 'Bangalore'})
        self.assertRedirects(resp, '/jobs-in-bangalore-india', fetch_redirect_response=False)

        resp = self.client.post(url, {})
        self.assertRedirects(resp, '/referrals', fetch_redirect_response=False)

    def test_search_redirect_lands_on_listing(self):
        resp = self.client.post(reverse('referrals:search'), {'keyword': 'Senior Engineer'}, follow=True)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['seo_slug'], 'senior-engineer-jobs')
        self.assertIn(1, _ids(resp.context['referrals']))

    def test_admin_like_keyword_round_trips(self):
        resp = self.client.post(reverse('referrals:search'), {'keyword': 'Administrator'}, follow=True)
        self.assertEqual(resp.redirect_chain[0][0], '/administrator-jobs')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['seo_slug'], 'administrator-jobs')

    def test_non_ascii_experience_is_ignored_on_listing(self):
        resp = self.client.get('/python-jobs', {'experience': '²'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn(1, _ids(resp.context['referrals']))

    def test_search_rejects_non_ascii_experience(self):
        resp = self.client.post(reverse('referrals:search'), {'keyword': 'Python', 'experience': '²'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('experience', resp.context['form'].errors)

    @mock.patch('referrals.views.PAGE_SIZE', 1)
    def test_pagination_links_keep_filters_on_slug_pages(self):
        resp = self.client.get('/jobs-in-india', {'experience': '3'})
        self.assertEqual(resp.context['page_obj'].paginator.num_pages, 3)
        self.assertEqual(resp.context['next_page_url'], '?experience=3&page=2')
        self.assertEqual(resp.context['previous_page_url'], '')
        self.assertContains(resp, 'href="?experience=3&amp;page=2"')

        resp = self.client.get('/jobs-in-india', {'experience': '3', 'page': '2'})
        self.assertEqual(resp.context['page_obj'].number, 2)
        self.assertEqual(resp.context['previous_page_url'], '?experience=3&page=1')
        self.assertEqual(resp.context['next_page_url'], '?experience=3&page=3')

    @mock.patch('referrals.views.PAGE_SIZE', 1)
    def test_pagination_links_keep_filters_on_plain_listing(self):
        resp = self.client.get(reverse('referrals:referral_list'), {'city': 'Pune', 'country': 'India'})
        next_url = resp.context['next_page_url']
        self.assertIn('city=Pune', next_url)
        self.assertIn('page=2', next_url)

    def test_search_invalid_form_rerenders(self):
        resp = self.client.post(reverse('referrals:search'), {'experience': 'lots'})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context['form'].errors)

    def test_search_page_get(self):
        resp = self.client.get(reverse('referrals:search'), {'keyword': 'Go'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['form'].initial['keyword'], 'Go')

    def test_referral_detail_by_slug_and_id(self):
        referral = get_referral(1)
        resp = self.client.get(referral.seo_path)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['referral'], referral)
        self.assertEqual(resp.context['canonical_url'], 'https://tymblhub.com' + referral.seo_path)

        resp = self.client.get(reverse('referrals:referral_detail', args=[1]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get(reverse('referrals:referral_detail', args=[999])).status_code, 404)

    def test_company_detail_by_slug(self):
        resp = self.client.get('/google-careers-cid-1')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['company'].name, 'Google')
        self.assertEqual(sorted(_ids(resp.context['referrals'])), [1, 7])
        self.assertEqual(self.client.get('/nowhere-careers-cid-77').status_code, 404)
