################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.connector
# Contains:
# - Single use LDAP Connector (connect, bind, search, unbind)

# ---------------------------------- IMPORTS -----------------------------------#
# LDAP
try:
	import ldap3
	from ldap3.core.exceptions import (
		LDAPException,
		LDAPBindError,
		LDAPOperationResult,
	)
except ImportError:  # pragma: no cover
	ldap3 = None

from directory_auth.config.settings import DirectoryAuthSettings
from directory_auth.constants.attrs import LDAP_RESPONSE_DN
from directory_auth.exceptions import auth as exc_auth

# Libs
from typing import Iterable
from uuid import uuid4
import logging
###############################################################################

logger = logging.getLogger(__name__)

LDAP_PROTOCOL_VERSION = 3
LDAP_SEARCH_RESULT_ENTRY = "searchResEntry"


class LDAPConnector(object):
	"""One directory connection for a single authentication attempt.

	Must be used as a context manager, the connection is bound on enter and
	unbound on exit, including when binding itself fails.
	"""

	connection: "ldap3.Connection"
	log_debug_prefix = "[DEBUG - LDAPConnector] | "
	_entered = False

	def __init__(
		self,
		settings: DirectoryAuthSettings,
		user_dn: str = None,
		password: str = None,
		allow_anonymous=False,
	):
		if ldap3 is None:
			raise exc_auth.DirectoryConfigurationError(
				data={
					"message": "LDAP functionality not available. "
					"Please install the ldap3 package."
				}
			)
		self.__new_uuid__()
		self.settings = settings
		self.user_dn = user_dn or None
		self.anonymous = not user_dn and not password

		if self.anonymous and not allow_anonymous:
			raise exc_auth.DirectoryCredentialError(
				data={"message": "Bind: Anonymous bind is not allowed."}
			)
		if not self.anonymous and (not user_dn or not password):
			raise exc_auth.DirectoryCredentialError(
				data={"message": "Bind: Both a principal and a password are required."}
			)
		self._temp_password = password or None

		self.__log_init__()

		# Initialize Server Args Dictionary
		server_args = {
			"port": settings.LDAP_AUTH_PORT,
			"get_info": ldap3.NONE,
			"connect_timeout": settings.LDAP_AUTH_CONNECT_TIMEOUT,
			"use_ssl": settings.LDAP_AUTH_USE_SSL,
			# Referrals are never followed
			"allowed_referral_hosts": [],
		}
		try:
			# Include TLS, if requested.
			if settings.LDAP_AUTH_USE_TLS:
				self.tlsSettings = ldap3.Tls(
					ciphers="ALL",
					version=settings.tls_version,
				)
				server_args["tls"] = self.tlsSettings
			else:
				self.tlsSettings = None
			self.server = ldap3.Server(settings.LDAP_AUTH_URL, **server_args)
		except LDAPException as ex:
			logger.error("Invalid LDAP server definition: %s", ex)
			raise exc_auth.DirectoryConfigurationError(data={"message": f"Connect: {ex}"})
		self.connection = None

	def __log_init__(self):
		logger.debug("%sUser DN: %s", self.log_debug_prefix, self.user_dn or "(anonymous)")
		logger.debug("%sURL: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_URL)
		logger.debug("%sPort: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_PORT)
		logger.debug(
			"%sConnect Timeout: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_CONNECT_TIMEOUT
		)
		logger.debug(
			"%sReceive Timeout: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_RECEIVE_TIMEOUT
		)
		logger.debug("%sUse SSL: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_USE_SSL)
		logger.debug("%sUse TLS: %s", self.log_debug_prefix, self.settings.LDAP_AUTH_USE_TLS)

	def __enter__(self) -> "LDAPConnector":
		self._entered = True
		self.bind()
		logger.info("Connection %s opened.", self.uuid)
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.__validate_entered__()
		self.close()
		if exc_value:
			logger.debug("Connection %s closed after %s.", self.uuid, exc_type.__name__)

	def __validate_entered__(self) -> None:
		"""Ensure the LDAPConnector is used within a context manager."""
		if not self._entered:
			raise Exception(
				"LDAPConnector can only be used as a context manager or forcing _entered to True."
			)

	def __new_uuid__(self) -> None:
		self.uuid = uuid4()

	def bind(self) -> None:
		self.__validate_entered__()
		connection_args = {
			"user": self.user_dn,
			"password": self._temp_password,
			"authentication": ldap3.ANONYMOUS if self.anonymous else ldap3.SIMPLE,
			"version": LDAP_PROTOCOL_VERSION,
			"auto_bind": ldap3.AUTO_BIND_NONE,
			"auto_referrals": False,
			"raise_exceptions": True,
			"receive_timeout": self.settings.LDAP_AUTH_RECEIVE_TIMEOUT,
			"check_names": True,
		}
		# ! Unset Password ! #
		del self._temp_password

		# Connect.
		try:
			self.connection = ldap3.Connection(self.server, **connection_args)
			self.connection.open()
			if self.settings.LDAP_AUTH_USE_TLS:
				logger.debug("Starting TLS for connection %s", self.uuid)
				self.connection.start_tls()
		except LDAPException as ex:
			logger.warning("LDAP connection to %s failed: %s", self.settings.LDAP_AUTH_URL, ex)
			self.close()
			raise exc_auth.DirectoryTransportError(data={"message": f"Connect: {ex}"})

		# Bind to LDAP directory.
		try:
			bound = self.connection.bind()
		except (LDAPBindError, LDAPOperationResult) as ex:
			logger.warning("LDAP bind failed for %s: %s", self.user_dn or "(anonymous)", ex)
			self.close()
			raise exc_auth.DirectoryCredentialError(data={"message": f"Bind: {ex}"})
		except LDAPException as ex:
			logger.warning("LDAP bind transport failure for %s: %s", self.user_dn, ex)
			self.close()
			raise exc_auth.DirectoryTransportError(data={"message": f"Bind: {ex}"})
		if not bound:
			description = (self.connection.result or {}).get("description", "bind rejected")
			logger.warning("LDAP bind rejected for %s: %s", self.user_dn or "(anonymous)", description)
			self.close()
			raise exc_auth.DirectoryCredentialError(data={"message": f"Bind: {description}"})
		logger.debug("LDAP bind for user %s succeeded", self.user_dn or "(anonymous)")

	def close(self) -> None:
		"""Unbind the connection, safe to call more than once."""
		if self.connection is None:
			return
		connection, self.connection = self.connection, None
		try:
			connection.unbind()
		except LDAPException as ex:
			logger.warning("Connection %s did not unbind cleanly: %s", self.uuid, ex)
		logger.info("Connection %s closed.", self.uuid)

	def search(self, search_base: str, search_filter: str, attributes: Iterable[str]) -> dict:
		"""Search for exactly one entry.

		Returns:
			dict: ldap3 response entry with dn and attributes keys.

		Raises:
			DirectoryTransportError: The search request failed.
			DirectoryLookupError: Zero or several entries matched, or the
			result was malformed.
		"""
		self.__validate_entered__()
		if self.connection is None:
			raise exc_auth.DirectoryTransportError(
				data={"message": "Search: No LDAP Connection was open prior to this operation."}
			)
		logger.debug("%sSearch Filter: %s", self.log_debug_prefix, search_filter)
		try:
			self.connection.search(
				search_base=search_base,
				search_filter=search_filter,
				search_scope=ldap3.SUBTREE,
				attributes=list(attributes),
			)
		except LDAPException as ex:
			logger.warning("LDAP search failed: %s", ex)
			raise exc_auth.DirectoryTransportError(data={"message": f"Search: {ex}"})

		response = self.connection.response
		if response is None or not isinstance(response, list):
			raise exc_auth.DirectoryLookupError(
				data={"message": "Received invalid search result."}
			)
		# Referrals are never followed, skip them
		entries = [r for r in response if r.get("type", LDAP_SEARCH_RESULT_ENTRY) == LDAP_SEARCH_RESULT_ENTRY]
		if len(entries) != 1:
			logger.warning("LDAP user lookup returned %s entries", len(entries))
			raise exc_auth.DirectoryLookupError(
				data={"message": "Could not find user object in directory."}
			)

		entry = entries[0]
		if not entry.get(LDAP_RESPONSE_DN) or entry.get("attributes") is None:
			raise exc_auth.DirectoryLookupError(
				data={"message": "Received invalid search result."}
			)
		return entry
