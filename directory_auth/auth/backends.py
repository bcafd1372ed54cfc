################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.backends
# Contains the Django authentication backends

# ---------------------------------- IMPORTS --------------------------------- #
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from directory_auth.auth.result import AuthResultSuccess, AuthResultType
from directory_auth.auth import authenticate as directory_authenticate
import logging
################################################################################

logger = logging.getLogger(__name__)


def split_display_name(name: str) -> tuple[str, str]:
	if not name:
		return "", ""
	parts = name.strip().split(" ", 1)
	if len(parts) == 1:
		return parts[0], ""
	return parts[0], parts[1]


class DirectoryBackend(ModelBackend):
	"""
	An authentication backend that delegates to an Active Directory or
	LDAP server.

	Users are matched to local accounts by email, and created on the fly
	when LDAP_AUTH_CREATE_ACCOUNT is set. Email logins are left to the next
	backend when LDAP_AUTH_FALLBACK is set.
	"""

	supports_inactive_user = False

	def authenticate(self, request, username=None, password=None, **kwargs):
		if not password or not username:
			return None

		result = directory_authenticate(username, password)
		if result.type == AuthResultType.FALLBACK:
			return None
		return self.get_or_create_user(result)

	def get_or_create_user(self, result: AuthResultSuccess):
		User = get_user_model()
		try:
			user = User.objects.get(email__iexact=result.email)
		except ObjectDoesNotExist:
			if not result.create_account:
				logger.warning("No local account for directory user %s", result.email)
				return None
			first_name, last_name = split_display_name(result.name)
			user = User.objects.create_user(
				username=result.email[: User._meta.get_field("username").max_length],
				email=result.email,
				first_name=first_name,
				last_name=last_name,
			)
			logger.info("Created local account for directory user %s", result.email)
		except User.MultipleObjectsReturned:
			logger.error("Several local accounts share the email %s", result.email)
			return None
		if not self.user_can_authenticate(user):
			return None
		return user


class EmailAuthBackend(ModelBackend):
	"""
	Authenticate Local DB user using an e-mail address.
	"""

	supports_inactive_user = False

	def authenticate(self, request, username=None, password=None, **kwargs):
		if not password or not username:
			return None

		User = get_user_model()
		try:
			user = User.objects.get(email__iexact=username)
		except (ObjectDoesNotExist, User.MultipleObjectsReturned):
			return None
		if user.check_password(password) and self.user_can_authenticate(user):
			return user
		return None
