# pragma: no cover
# File: auth_bridge/local_django_settings_sample.py
# Copy to auth_bridge/local_django_settings.py, any option in
# auth_bridge.settings or directory_auth.ldap.defaults can be overridden here.

# If you want to debug
# DEBUG = True or False
# LOG_LEVEL = "DEBUG"

### Active Directory
LDAP_AUTH_MODE = "active_directory"
LDAP_AUTH_URL = "ad1.directory.example.com"
LDAP_AUTH_PORT = 389
LDAP_AUTH_SEARCH_BASE = "CN=Users,DC=directory,DC=example,DC=com"
LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN = "directory"
LDAP_AUTH_CREATE_ACCOUNT = False
LDAP_AUTH_FALLBACK = True
# LDAP_AUTH_MEMBERSHIP = r"^CN=My Group,"

### Generic LDAP
# LDAP_AUTH_MODE = "ldap"
# LDAP_AUTH_URL = "ldap://ldap.example.com"
# LDAP_AUTH_PORT = 389
# LDAP_AUTH_CONNECTION_USER_DN = ""
# LDAP_AUTH_CONNECTION_PASSWORD = ""
# LDAP_AUTH_SEARCH_BASE = "OU=people,DC=example,DC=com"
# LDAP_AUTH_SEARCH_FILTER = "(&(uid=%name%)(objectClass=posixAccount))"
# LDAP_AUTH_NAME_ATTRIBUTE = "displayName"
# LDAP_AUTH_MAIL_ATTRIBUTE = "mail"
