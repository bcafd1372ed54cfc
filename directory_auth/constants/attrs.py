################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.constants.attrs
# Contains system LDAP Attribute related constants.
################################################################################

# LDAP Attributes
LDAP_ATTR_FULL_NAME = "displayName"
LDAP_ATTR_EMAIL = "mail"
LDAP_ATTR_USER_GROUPS = "memberOf"
LDAP_ATTR_USERNAME_SAMBA_ADDS = "sAMAccountName"
LDAP_ATTR_UPN = "userPrincipalName"

# Key of the entry DN in ldap3 search responses
LDAP_RESPONSE_DN = "dn"

# Principal name forms for which the submitted account is used verbatim
LDAP_ALTERNATE_PRINCIPAL_ATTRS = (LDAP_ATTR_UPN,)

# Authentication modes
AUTH_MODE_ACTIVE_DIRECTORY = "active_directory"
AUTH_MODE_LDAP = "ldap"
AUTH_MODES = (AUTH_MODE_ACTIVE_DIRECTORY, AUTH_MODE_LDAP)

# Search filter placeholder
SEARCH_FILTER_PLACEHOLDER = "%name%"
