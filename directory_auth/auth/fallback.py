################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.fallback
# Decides when a login is handed back to the host application's own
# credential store. The check runs before any directory call.

# ---------------------------------- IMPORTS --------------------------------- #
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from directory_auth.config.settings import DirectoryAuthSettings
################################################################################


def is_email(value: str) -> bool:
	try:
		validate_email(value)
	except ValidationError:
		return False
	return True


def should_fallback(account_name: str, settings: DirectoryAuthSettings) -> bool:
	"""Email addresses are verified by the host when fallback is enabled."""
	return bool(settings.LDAP_AUTH_FALLBACK) and is_email(account_name)
