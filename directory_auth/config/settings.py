################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.config.settings
# Description:	Immutable directory authentication settings built from
# file defaults and Django settings overrides.

# ---------------------------------- IMPORTS --------------------------------- #
from typing import NamedTuple, Any
from enum import Enum
from directory_auth.ldap import defaults
from directory_auth.ldap.filter import validate_filter_template
from directory_auth.constants.attrs import (
	AUTH_MODES,
	AUTH_MODE_LDAP,
	LDAP_ALTERNATE_PRINCIPAL_ATTRS,
)
from directory_auth.exceptions import auth as exc_auth
from django.conf import settings as django_settings
import logging
import re
import ssl
################################################################################

logger = logging.getLogger(__name__)


# ! You also have to add the settings to the following files:
# directory_auth.config.settings <--- You're Here
# directory_auth.ldap.defaults
class DirectoryAuthSettings(NamedTuple):
	LDAP_AUTH_MODE: str = defaults.LDAP_AUTH_MODE
	LDAP_AUTH_URL: str = defaults.LDAP_AUTH_URL
	LDAP_AUTH_PORT: int = defaults.LDAP_AUTH_PORT
	LDAP_AUTH_SEARCH_BASE: str = defaults.LDAP_AUTH_SEARCH_BASE
	LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN: str = defaults.LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN
	LDAP_AUTH_CONNECTION_USER_DN: str = defaults.LDAP_AUTH_CONNECTION_USER_DN
	LDAP_AUTH_CONNECTION_PASSWORD: str = defaults.LDAP_AUTH_CONNECTION_PASSWORD
	LDAP_AUTH_ALLOW_ANONYMOUS_BIND: bool = defaults.LDAP_AUTH_ALLOW_ANONYMOUS_BIND
	LDAP_AUTH_SEARCH_FILTER: str = defaults.LDAP_AUTH_SEARCH_FILTER
	LDAP_AUTH_NORMALIZE_SEARCH_NAME: bool = defaults.LDAP_AUTH_NORMALIZE_SEARCH_NAME
	LDAP_AUTH_CREATE_ACCOUNT: bool = defaults.LDAP_AUTH_CREATE_ACCOUNT
	LDAP_AUTH_FALLBACK: bool = defaults.LDAP_AUTH_FALLBACK
	LDAP_AUTH_MEMBERSHIP: str = defaults.LDAP_AUTH_MEMBERSHIP
	LDAP_AUTH_USERNAME_IDENTIFIER: str = defaults.LDAP_AUTH_USERNAME_IDENTIFIER
	LDAP_AUTH_NAME_ATTRIBUTE: str = defaults.LDAP_AUTH_NAME_ATTRIBUTE
	LDAP_AUTH_MAIL_ATTRIBUTE: str = defaults.LDAP_AUTH_MAIL_ATTRIBUTE
	LDAP_AUTH_MEMBERSHIP_ATTRIBUTE: str = defaults.LDAP_AUTH_MEMBERSHIP_ATTRIBUTE
	LDAP_AUTH_CONNECT_TIMEOUT: int = defaults.LDAP_AUTH_CONNECT_TIMEOUT
	LDAP_AUTH_RECEIVE_TIMEOUT: int = defaults.LDAP_AUTH_RECEIVE_TIMEOUT
	LDAP_AUTH_USE_SSL: bool = defaults.LDAP_AUTH_USE_SSL
	LDAP_AUTH_USE_TLS: bool = defaults.LDAP_AUTH_USE_TLS
	LDAP_AUTH_TLS_VERSION: Any = defaults.LDAP_AUTH_TLS_VERSION
	LDAP_AUTH_FOLLOW_REFERRALS: bool = defaults.LDAP_AUTH_FOLLOW_REFERRALS

	@classmethod
	def from_django(cls, **overrides) -> "DirectoryAuthSettings":
		"""Build settings from the Django settings module.

		A new instance is returned on every call so settings changes are
		picked up by the next authentication attempt.
		"""
		values = {
			k: getattr(django_settings, k, default)
			for k, default in cls._field_defaults.items()
		}
		values.update(overrides)
		return cls(**values)

	@property
	def is_ldap_mode(self) -> bool:
		return self.LDAP_AUTH_MODE == AUTH_MODE_LDAP

	@property
	def uses_alternate_principal(self) -> bool:
		return self.LDAP_AUTH_USERNAME_IDENTIFIER in LDAP_ALTERNATE_PRINCIPAL_ATTRS

	@property
	def is_anonymous_search(self) -> bool:
		return not self.LDAP_AUTH_CONNECTION_USER_DN and not self.LDAP_AUTH_CONNECTION_PASSWORD

	@property
	def membership_pattern(self) -> re.Pattern | None:
		if not self.LDAP_AUTH_MEMBERSHIP:
			return None
		return re.compile(self.LDAP_AUTH_MEMBERSHIP)

	@property
	def tls_version(self):
		if not isinstance(self.LDAP_AUTH_TLS_VERSION, Enum):
			return getattr(ssl, self.LDAP_AUTH_TLS_VERSION)
		return self.LDAP_AUTH_TLS_VERSION

	def validate(self) -> "DirectoryAuthSettings":
		"""Raises DirectoryConfigurationError on unusable settings."""
		errors = []
		if self.LDAP_AUTH_MODE not in AUTH_MODES:
			errors.append(f"LDAP_AUTH_MODE must be one of {', '.join(AUTH_MODES)}.")
		if not self.LDAP_AUTH_URL:
			errors.append("LDAP_AUTH_URL is required.")
		if not self.LDAP_AUTH_SEARCH_BASE:
			errors.append("LDAP_AUTH_SEARCH_BASE is required.")
		if self.LDAP_AUTH_FOLLOW_REFERRALS:
			errors.append("LDAP_AUTH_FOLLOW_REFERRALS may not be enabled.")
		for k in ("LDAP_AUTH_CONNECT_TIMEOUT", "LDAP_AUTH_RECEIVE_TIMEOUT"):
			v = getattr(self, k)
			if not isinstance(v, (int, float)) or isinstance(v, bool) or v <= 0:
				errors.append(f"{k} must be a positive number.")
		if self.LDAP_AUTH_MEMBERSHIP:
			try:
				re.compile(self.LDAP_AUTH_MEMBERSHIP)
			except re.error as e:
				errors.append(f"LDAP_AUTH_MEMBERSHIP is not a valid regular expression ({e}).")
		if self.LDAP_AUTH_USE_TLS:
			try:
				self.tls_version
			except (AttributeError, TypeError):
				errors.append("LDAP_AUTH_TLS_VERSION is not a valid ssl protocol.")

		if self.is_ldap_mode:
			try:
				validate_filter_template(self.LDAP_AUTH_SEARCH_FILTER)
			except (TypeError, ValueError) as e:
				errors.append(f"LDAP_AUTH_SEARCH_FILTER: {e}")
			if bool(self.LDAP_AUTH_CONNECTION_USER_DN) != bool(self.LDAP_AUTH_CONNECTION_PASSWORD):
				errors.append(
					"LDAP_AUTH_CONNECTION_USER_DN and LDAP_AUTH_CONNECTION_PASSWORD"
					" must both be set or both be empty."
				)
			elif self.is_anonymous_search and not self.LDAP_AUTH_ALLOW_ANONYMOUS_BIND:
				errors.append(
					"Anonymous search is disabled, set LDAP_AUTH_CONNECTION_USER_DN"
					" and LDAP_AUTH_CONNECTION_PASSWORD."
				)
		elif not self.uses_alternate_principal and not self.LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN:
			logger.warning(
				"LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN is empty, bare account names"
				" will be bound without a domain prefix."
			)

		if errors:
			for e in errors:
				logger.error("Directory Authentication setting error: %s", e)
			raise exc_auth.DirectoryConfigurationError(data={"message": " ".join(errors)})
		return self
