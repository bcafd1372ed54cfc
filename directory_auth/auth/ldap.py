################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.ldap
# Generic LDAP authentication: the connection user searches the user's
# entry, then the entry's DN is bound with the submitted password.

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
from directory_auth.constants.attrs import LDAP_RESPONSE_DN
from directory_auth.exceptions import auth as exc_auth
from directory_auth.ldap.account import extract_login
from directory_auth.ldap.connector import LDAPConnector
from directory_auth.ldap.filter import render_search_filter
from directory_auth.ldap.membership import check_membership
import logging
################################################################################

logger = logging.getLogger(__name__)

MSG_USER_NOT_RETRIEVED = "%s (failed to retrieve user object)"
MSG_USER_NOT_VALIDATED = "Could not validate LDAP user, please check user name and password."


def get_user_entry(account_name: str, settings: DirectoryAuthSettings) -> dict:
	"""Find the directory entry of an account with the connection user.

	Returns:
		dict: ldap3 response entry with dn and attributes keys.
	"""
	search_name = account_name
	if settings.LDAP_AUTH_NORMALIZE_SEARCH_NAME:
		search_name = extract_login(account_name)

	with LDAPConnector(
		settings,
		user_dn=settings.LDAP_AUTH_CONNECTION_USER_DN,
		password=settings.LDAP_AUTH_CONNECTION_PASSWORD,
		allow_anonymous=settings.LDAP_AUTH_ALLOW_ANONYMOUS_BIND,
	) as ldc:
		return ldc.search(
			settings.LDAP_AUTH_SEARCH_BASE,
			render_search_filter(settings.LDAP_AUTH_SEARCH_FILTER, search_name),
			get_requested_attributes(settings),
		)


def verify_user_password(user_dn: str, password: str, settings: DirectoryAuthSettings) -> None:
	"""Bind as the user to validate the password, raises on failure."""
	with LDAPConnector(settings, user_dn=user_dn, password=password):
		pass


def authenticate(
	account_name: str,
	password: str,
	settings: DirectoryAuthSettings = None,
) -> AuthResult:
	"""Authenticate an account against an LDAP directory.

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

	# First try to find the user record of the user
	try:
		entry = get_user_entry(account_name, settings)
	except exc_auth.DirectoryAuthError as e:
		logger.warning("LDAP user lookup failed for %s: %s", account_name, e.message)
		raise e.__class__(data={"message": MSG_USER_NOT_RETRIEVED % e.message}) from e

	# Try to authenticate with the found DN and entered password
	user_dn = entry[LDAP_RESPONSE_DN]
	try:
		verify_user_password(user_dn, password, settings)
	except exc_auth.DirectoryCredentialError as e:
		logger.warning("LDAP password validation failed for %s: %s", user_dn, e.message)
		raise exc_auth.DirectoryCredentialError(data={"message": MSG_USER_NOT_VALIDATED}) from e

	attributes = entry["attributes"]
	try:
		if settings.LDAP_AUTH_MEMBERSHIP:
			check_membership(
				attributes,
				settings.membership_pattern,
				settings.LDAP_AUTH_MEMBERSHIP_ATTRIBUTE,
			)
		result = build_success(attributes, settings, default_name=extract_login(account_name))
	except exc_auth.DirectoryAuthError as e:
		logger.warning("LDAP authentication denied for %s: %s", user_dn, e.message)
		raise

	logger.info("LDAP authentication succeeded for %s", user_dn)
	return result
