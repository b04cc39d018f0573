"""Package name mappings for gen-env."""
import sys
from types import MappingProxyType

# Known module-to-package mappings
MODULE_TO_PACKAGE = MappingProxyType({
    'PIL': 'Pillow',
    'sklearn': 'scikit-learn',
    'skimage': 'scikit-image',
    'bs4': 'beautifulsoup4',
    'yaml': 'PyYAML',
    'cv2': 'opencv-python',
    'dotenv': 'python-dotenv',
    'requests_html': 'requests-html',
    'psycopg2': 'psycopg2-binary',
    'pydantic_settings': 'pydantic-settings',
    'dateutil': 'python-dateutil',
    'jose': 'python-jose',
    'jwt': 'PyJWT',
    'serial': 'pyserial',
    'usb': 'pyusb',
    'Crypto': 'pycryptodome',
    'OpenSSL': 'pyOpenSSL',
    'attr': 'attrs',
    'magic': 'python-magic',
    'docx': 'python-docx',
    'pptx': 'python-pptx',
    'fitz': 'PyMuPDF',
    'win32api': 'pywin32',
    'win32com': 'pywin32',
    'MySQLdb': 'mysqlclient',
    'Levenshtein': 'python-Levenshtein',
    'socketio': 'python-socketio',
    'engineio': 'python-engineio',
    'multipart': 'python-multipart',
    'telegram': 'python-telegram-bot',
    'discord': 'discord.py',
    'imblearn': 'imbalanced-learn',
    'corsheaders': 'django-cors-headers',
    'rest_framework': 'djangorestframework',
})

# Companion packages installed whenever the key package is selected
COMPLEMENTARY_PACKAGES = MappingProxyType({
    'rembg': ('onnxruntime',),
})

# Modules removed from newer interpreters that older projects still import
_LEGACY_STDLIB_MODULES = frozenset({
    'aifc', 'asynchat', 'asyncore', 'audioop', 'binhex', 'cgi', 'cgitb',
    'chunk', 'crypt', 'distutils', 'formatter', 'imghdr', 'imp', 'lib2to3',
    'macpath', 'mailcap', 'msilib', 'nis', 'nntplib', 'ossaudiodev', 'parser',
    'pipes', 'smtpd', 'sndhdr', 'spwd', 'sunau', 'symbol', 'telnetlib', 'uu',
    'xdrlib',
})

# Modules shipped with the runtime, never independently installable
STDLIB_MODULES = frozenset(sys.stdlib_module_names) | _LEGACY_STDLIB_MODULES | frozenset({
    'cProfile', 'idlelib', 'test', 'turtledemo', 'ensurepip', 'venv',
})
