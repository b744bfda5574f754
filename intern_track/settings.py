from pathlib import Path

from .env_config import load_env_file, get_env_var, get_bool_env, get_int_env, get_list_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_env_file(BASE_DIR / '.env')

SECRET_KEY = get_env_var('SECRET_KEY', 'django-insecure-dev-only-change-me')
DEBUG = get_bool_env('DEBUG', False)
ALLOWED_HOSTS = get_list_env('ALLOWED_HOSTS', ['localhost', '127.0.0.1', 'testserver'])

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'rest_framework',
    'rest_framework.authtoken',
    'django_filters',

    'accounts',
    'students',
    'recruiters',
    'internships',
    'applications',
    'admin_panel',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'intern_track.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'intern_track.wsgi.application'

# Database
DB_ENGINE = get_env_var('DB_ENGINE', 'sqlite')
if DB_ENGINE == 'postgres':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': get_env_var('DB_NAME', 'intern_track'),
            'USER': get_env_var('DB_USER', 'postgres'),
            'PASSWORD': get_env_var('DB_PASSWORD', ''),
            'HOST': get_env_var('DB_HOST', 'localhost'),
            'PORT': get_env_var('DB_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / get_env_var('DB_NAME', 'db.sqlite3'),
        }
    }

AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = '/uploads/'
MEDIA_ROOT = BASE_DIR / 'uploads'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# REST framework
PAGE_SIZE = get_int_env('PAGE_SIZE', 10)
MAX_PAGE_SIZE = get_int_env('MAX_PAGE_SIZE', 100)

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'accounts.authentication.BearerTokenAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'DEFAULT_PAGINATION_CLASS': 'intern_track.pagination.StandardPagination',
    'PAGE_SIZE': PAGE_SIZE,
    'EXCEPTION_HANDLER': 'intern_track.exceptions.custom_exception_handler',
}

# Accounts
TOKEN_TTL_HOURS = get_int_env('TOKEN_TTL_HOURS', 24 * 7)
ALLOW_ADMIN_SIGNUP = get_bool_env('ALLOW_ADMIN_SIGNUP', False)
# seconds a password reset token stays valid
PASSWORD_RESET_TIMEOUT = get_int_env('PASSWORD_RESET_TIMEOUT', 10 * 60)

# Uploads
RESUME_MAX_BYTES = get_int_env('RESUME_MAX_BYTES', 5 * 1024 * 1024)

# Logging
LOG_LEVEL = get_env_var('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
