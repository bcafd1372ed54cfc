################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.active_directory
# Active Directory authentication: binds as DOMAIN\login with the submitted
# password, then looks up the user's profile with the same connection.

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.auth.base import (
	get_settings,
	check_credentials_given,
	get_requested_attributes,
	build_success,
)
from directory_auth.auth.fallback import should_fallback
from directory_auth.auth.result import AuthResult, AuthResultFallback
from directory_auth.config.settings import DirectoryAuthSettings
from directory_auth.exceptions import auth as exc_auth
from directory_auth.ldap.account import normalize_account_name
from directory_auth.ldap.connector import LDAPConnector
from directory_auth.ldap.filter import LDAPFilter
from directory_auth.ldap.membership import check_membership
import logging
################################################################################

logger = logging.getLogger(__name__)


def authenticate(
	account_name: str,
	password: str,
	settings: DirectoryAuthSettings = None,
) -> AuthResult:
	"""Authenticate an account against Active Directory.

	The account name can be given as 'domain\\login', 'login@domain' or just
	'login', the configured domain is added to bare logins for the bind.

	Returns:
		AuthResult: AuthResultFallback for email addresses when fallback is
		enabled, AuthResultSuccess otherwise.

	Raises:
		DirectoryAuthError: Authentication failed.
	"""
	settings = get_settings(settings)
	if should_fallback(account_name, settings):
		logger.info("Deferring email login to local credentials.")
		return AuthResultFallback()

	check_credentials_given(account_name, password)
	account = normalize_account_name(
		account_name,
		domain=settings.LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN,
		alternate_principal=settings.uses_alternate_principal,
	)
	search_filter = LDAPFilter.eq(settings.LDAP_AUTH_USERNAME_IDENTIFIER, account.login)

	try:
		with LDAPConnector(settings, user_dn=account.principal, password=password) as ldc:
			entry = ldc.search(
				settings.LDAP_AUTH_SEARCH_BASE,
				search_filter.to_string(),
				get_requested_attributes(settings),
			)
			attributes = entry["attributes"]
			if settings.LDAP_AUTH_MEMBERSHIP:
				check_membership(
					attributes,
					settings.membership_pattern,
					settings.LDAP_AUTH_MEMBERSHIP_ATTRIBUTE,
				)
		result = build_success(attributes, settings, default_name=account.login)
	except exc_auth.DirectoryAuthError as e:
		logger.warning(
			"Active Directory authentication failed for %s (%s): %s",
			account.principal,
			e.default_code,
			e.message,
		)
		raise

	logger.info("Active Directory authentication succeeded for %s", account.principal)
	return result
