################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.apps
# Contains the Directory Auth App initialization class

# ---------------------------------- IMPORTS --------------------------------- #
from django.apps import AppConfig
from logging import getLogger
################################################################################

logger = getLogger(__name__)


class DirectoryAuthConfig(AppConfig):
	name = "directory_auth"
	verbose_name = "Directory Authentication"

	def ready(self):
		"""Report configuration problems at startup instead of first login"""
		from directory_auth.config.settings import DirectoryAuthSettings
		from directory_auth.exceptions.auth import DirectoryConfigurationError

		try:
			settings = DirectoryAuthSettings.from_django().validate()
		except DirectoryConfigurationError as e:
			logger.error("Directory authentication is misconfigured: %s", e.message)
			return
		logger.info(
			"Directory authentication ready (mode: %s, server: %s).",
			settings.LDAP_AUTH_MODE,
			settings.LDAP_AUTH_URL,
		)
