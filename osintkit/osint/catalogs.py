"""Static reference data used by adapters and the simulation generator."""

COUNTRY_FLAGS = {
    'US': '🇺🇸', 'GB': '🇬🇧', 'DE': '🇩🇪', 'FR': '🇫🇷', 'CA': '🇨🇦',
    'JP': '🇯🇵', 'AU': '🇦🇺', 'RU': '🇷🇺', 'CN': '🇨🇳', 'BR': '🇧🇷',
    'IN': '🇮🇳', 'IT': '🇮🇹', 'ES': '🇪🇸', 'NL': '🇳🇱', 'SE': '🇸🇪',
}
DEFAULT_FLAG = '🏳️'

# Anything not listed is low risk.
COUNTRY_RISK = {
    'RU': 'high',
    'KP': 'high',
    'IR': 'high',
    'CN': 'medium',
    'BR': 'medium',
}

COUNTRY_NAMES = {
    'US': 'United States', 'GB': 'United Kingdom', 'DE': 'Germany', 'FR': 'France',
    'CA': 'Canada', 'JP': 'Japan', 'AU': 'Australia', 'RU': 'Russia', 'CN': 'China',
    'BR': 'Brazil', 'IN': 'India', 'IT': 'Italy', 'ES': 'Spain', 'NL': 'Netherlands',
    'SE': 'Sweden', 'KP': 'North Korea', 'IR': 'Iran',
}


def country_flag(code: str) -> str:
    return COUNTRY_FLAGS.get((code or '').upper(), DEFAULT_FLAG)


def country_risk(code: str) -> str:
    return COUNTRY_RISK.get((code or '').upper(), 'low')


USERNAME_PLATFORMS = [
    'GitHub', 'Twitter', 'Reddit', 'Instagram', 'LinkedIn',
    'Facebook', 'TikTok', 'YouTube', 'Discord', 'Steam',
]

SIMULATED_PLATFORMS = USERNAME_PLATFORMS + [
    'Pastebin', 'Twitch', 'Pinterest', 'Snapchat', 'WhatsApp',
]

KNOWN_BREACHES = [
    {'name': 'LinkedIn', 'date': '2021-06-22', 'accounts': 700000000, 'verified': True},
    {'name': 'Adobe', 'date': '2013-10-04', 'accounts': 152000000, 'verified': True},
    {'name': 'Dropbox', 'date': '2012-07-31', 'accounts': 68648009, 'verified': True},
    {'name': 'Yahoo', 'date': '2014-09-22', 'accounts': 500000000, 'verified': True},
    {'name': 'Equifax', 'date': '2017-07-29', 'accounts': 147900000, 'verified': True},
]

EMAIL_RISK_TAGS = ['spam', 'phishing', 'malware', 'suspicious']

REGISTRARS = ['GoDaddy LLC', 'Namecheap Inc', 'Google Domains', 'Cloudflare']
REGISTRANT_COUNTRIES = ['US', 'UK', 'CA', 'DE', 'FR']
URL_SCAN_CATEGORIES = ['safe', 'suspicious', 'malicious', 'phishing']
COMMON_PORTS = [80, 443, 22, 21, 25, 53, 3389]
SAMPLE_CVES = ['CVE-2021-44228', 'CVE-2022-0778', 'CVE-2023-1234']
SSL_ISSUERS = ["Let's Encrypt Authority X3", 'DigiCert Inc', 'Cloudflare Inc']

IP_COUNTRIES = ['United States', 'United Kingdom', 'Germany', 'France', 'Canada', 'Japan', 'Australia']
IP_CITIES = ['New York', 'London', 'Berlin', 'Paris', 'Toronto', 'Tokyo', 'Sydney']
ORGANIZATIONS = ['Cloudflare Inc.', 'Amazon Technologies Inc.', 'Google LLC', 'Microsoft Corporation', 'Digital Ocean']

GEO_COUNTRIES = ['US', 'GB', 'DE', 'RU', 'CN', 'BR']
GEO_CITIES = ['New York', 'London', 'Berlin', 'Moscow', 'Beijing', 'São Paulo']

DARK_WEB_SOURCES = ['Tor Markets', 'Paste Sites', 'Forums', 'Telegram', 'Discord', 'IRC']
DARK_WEB_DATA_TYPES = ['Credentials', 'Personal Info', 'Financial', 'Corporate']

CORRELATION_FACTORS = ['Infrastructure Pattern', 'Temporal Relationship', 'Geographic Cluster']

# input types each technique is relevant to
MITRE_TECHNIQUES = [
    {
        'technique_id': 'T1566.001',
        'tactic_category': 'Initial Access',
        'technique': 'Spearphishing Attachment',
        'confidence': 'high',
        'description': 'Adversaries may send spearphishing emails with a malicious attachment in an attempt to gain access to victim systems.',
        'mitigation': 'Implement email security solutions and user awareness training.',
        'applies_to': ('email', 'domain'),
    },
    {
        'technique_id': 'T1078',
        'tactic_category': 'Defense Evasion',
        'technique': 'Valid Accounts',
        'confidence': 'medium',
        'description': 'Adversaries may obtain and abuse credentials of existing accounts as a means of gaining Initial Access.',
        'mitigation': 'Implement multi-factor authentication and monitor account usage.',
        'applies_to': ('email', 'username', 'domain', 'ip'),
    },
    {
        'technique_id': 'T1110',
        'tactic_category': 'Credential Access',
        'technique': 'Brute Force',
        'confidence': 'medium',
        'description': 'Adversaries may use brute force techniques to gain access to accounts when passwords are unknown.',
        'mitigation': 'Implement account lockout policies and monitor failed login attempts.',
        'applies_to': ('email', 'username', 'ip'),
    },
]
