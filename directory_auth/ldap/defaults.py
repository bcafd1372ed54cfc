################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.defaults
from directory_auth.constants.attrs import (
	AUTH_MODE_ACTIVE_DIRECTORY,
	LDAP_ATTR_USERNAME_SAMBA_ADDS,
	LDAP_ATTR_FULL_NAME,
	LDAP_ATTR_EMAIL,
	LDAP_ATTR_USER_GROUPS,
)
import ssl

### LDAP SETTINGS
# ! You also have to add the settings to the following files:
# directory_auth.config.settings
# directory_auth.ldap.defaults	<------------ You're Here
# Any of these may be overridden in the Django settings module.

# Which integration to use:
# - active_directory: bind as DOMAIN\login, then look up the profile.
# - ldap: bind as the connection user, search the user DN, re-bind as user.
LDAP_AUTH_MODE = AUTH_MODE_ACTIVE_DIRECTORY

# Host name or URL of the directory server (ldap:// or ldaps:// prefixes
# are accepted).
LDAP_AUTH_URL = "ldap://localhost"

# The LDAP port of the directory server. This is usually 389 (636 for SSL).
LDAP_AUTH_PORT = 389

# The LDAP search base for looking up users.
# Example: CN=Users,DC=directory,DC=example,DC=com
LDAP_AUTH_SEARCH_BASE = "dc=example,dc=com"

# Windows domain used as account name prefix (directory\bob)
LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN = "EXAMPLE"

# Connection user used to search for user objects (ldap mode only).
# Leave both empty to search anonymously.
LDAP_AUTH_CONNECTION_USER_DN = ""
LDAP_AUTH_CONNECTION_PASSWORD = ""

# ! Security relevant: anonymous binds are only ever used for the
# connection user search, never to verify submitted credentials.
LDAP_AUTH_ALLOW_ANONYMOUS_BIND = True

# Filter used to find the user object (ldap mode only). Every %name%
# placeholder is replaced with the escaped account name.
# Example: (&(uid=%name%)(objectClass=posixAccount))
LDAP_AUTH_SEARCH_FILTER = "(uid=%name%)"

# Replace %name% with the login part of the account name (bob for
# directory\bob or bob@directory) instead of the account name as entered.
LDAP_AUTH_NORMALIZE_SEARCH_NAME = False

# Ask the host application to create accounts for users that
# authenticated successfully but do not exist locally yet.
LDAP_AUTH_CREATE_ACCOUNT = False

# Let users that enter an email address log in with their local
# credentials instead of the directory.
LDAP_AUTH_FALLBACK = True

# Optional regular expression checked against every membership value.
# Example: ^CN=My Group,
LDAP_AUTH_MEMBERSHIP = ""

# Attribute the account name is looked up by (active_directory mode only).
# Use userPrincipalName to pass the account name through unchanged.
LDAP_AUTH_USERNAME_IDENTIFIER = LDAP_ATTR_USERNAME_SAMBA_ADDS

# Attributes holding the full name, email address and group memberships.
LDAP_AUTH_NAME_ATTRIBUTE = LDAP_ATTR_FULL_NAME
LDAP_AUTH_MAIL_ATTRIBUTE = LDAP_ATTR_EMAIL
LDAP_AUTH_MEMBERSHIP_ATTRIBUTE = LDAP_ATTR_USER_GROUPS

# Timeouts in seconds
LDAP_AUTH_CONNECT_TIMEOUT = 5
LDAP_AUTH_RECEIVE_TIMEOUT = 5

# Use SSL on connection.
LDAP_AUTH_USE_SSL = False

# Initiate TLS on connection.
LDAP_AUTH_USE_TLS = False

# Specify which TLS version to use
LDAP_AUTH_TLS_VERSION = ssl.PROTOCOL_TLSv1_2

# ! Security relevant: referrals can forward credentials to other hosts.
# Enabling this is refused by settings validation.
LDAP_AUTH_FOLLOW_REFERRALS = False
