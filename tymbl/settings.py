"""
Django settings for tymbl project.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# -------------------------
# Basic / environment
# -------------------------
SECRET_KEY = os.environ.get('TYMBL_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = os.environ.get('TYMBL_DEBUG', 'True').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = (
    os.environ.get('TYMBL_ALLOWED_HOSTS', '')
    .split(',') if os.environ.get('TYMBL_ALLOWED_HOSTS') else []
)


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.staticfiles',

    # project apps
    'seo',
    'referrals',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'seo.middleware.SeoRewriteMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'tymbl.urls'


# -------------------------
# Templates
# -------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [os.path.join(BASE_DIR, 'templates')],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.static',   # for {% static %} helper
                'django.template.context_processors.csrf',     # makes csrf_token available
            ],
        },
    },
]


WSGI_APPLICATION = 'tymbl.wsgi.application'


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('TYMBL_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static & media
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('TYMBL_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))

MEDIA_URL = '/media/'


# -------------------------
# Site / SEO
# -------------------------
# Absolute origin used for canonical URLs and JSON-LD; falls back to the request host.
SITE_URL = os.environ.get('TYMBL_SITE_URL', '').rstrip('/')
SITE_NAME = os.environ.get('TYMBL_SITE_NAME', 'TymblHub')

# Root-level path prefixes never treated as search slugs (STATIC_URL and MEDIA_URL are added).
SEO_SKIP_PREFIXES = [
    '/favicon',
    '/referrals',
    '/companies',
    '/search-referrals',
    '/login',
    '/register',
    '/forgot-password',
    '/profile',
    '/my-referrals',
    '/post-referral',
    '/refer',
]

# Minimum rapidfuzz partial_ratio for a keyword to match a referral.
REFERRAL_FUZZY_THRESHOLD = 80


# -------------------------
# Logging (basic)
# -------------------------
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {'class': 'logging.StreamHandler'},
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
        'seo': {
            'handlers': ['console'],
            'level': 'DEBUG' if DEBUG else 'INFO',
            'propagate': False,
        },
    },
}


# -------------------------
# Security (production suggestions)
# -------------------------
# In production, you should set these via environment variables:
# SECURE_HSTS_SECONDS = 31536000
# SECURE_SSL_REDIRECT = True
# CSRF_COOKIE_SECURE = True
