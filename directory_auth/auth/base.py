################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.base
# Shared steps of the directory authentication variants

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.auth.result import AuthResultSuccess
from directory_auth.config.settings import DirectoryAuthSettings
from directory_auth.exceptions import auth as exc_auth
from directory_auth.utils.main import getldapattrvalue
from typing import Mapping
################################################################################


def get_settings(settings: DirectoryAuthSettings = None) -> DirectoryAuthSettings:
	if settings is None:
		settings = DirectoryAuthSettings.from_django()
	return settings.validate()


def check_credentials_given(account_name: str, password: str) -> None:
	# An empty password would turn the user bind into an unauthenticated
	# bind, which most servers accept.
	if not account_name or not isinstance(account_name, str):
		raise exc_auth.DirectoryCredentialError(data={"message": "No account name given."})
	if not password or not isinstance(password, str):
		raise exc_auth.DirectoryCredentialError(data={"message": "No password given."})


def get_requested_attributes(settings: DirectoryAuthSettings) -> list[str]:
	attributes = [
		settings.LDAP_AUTH_NAME_ATTRIBUTE,
		settings.LDAP_AUTH_MAIL_ATTRIBUTE,
	]
	if settings.LDAP_AUTH_MEMBERSHIP:
		attributes.append(settings.LDAP_AUTH_MEMBERSHIP_ATTRIBUTE)
	return attributes


def build_success(
	attributes: Mapping,
	settings: DirectoryAuthSettings,
	default_name: str,
) -> AuthResultSuccess:
	"""Returns the identity record of an authenticated directory entry."""
	email = getldapattrvalue(attributes, settings.LDAP_AUTH_MAIL_ATTRIBUTE, None)
	if not email:
		raise exc_auth.DirectoryLookupError(
			data={
				"message": "User object has no email address "
				f"({settings.LDAP_AUTH_MAIL_ATTRIBUTE})."
			}
		)
	name = getldapattrvalue(attributes, settings.LDAP_AUTH_NAME_ATTRIBUTE, None)
	return AuthResultSuccess(
		email=str(email),
		name=str(name) if name else default_name,
		create_account=bool(settings.LDAP_AUTH_CREATE_ACCOUNT),
	)
