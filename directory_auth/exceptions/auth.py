################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.exceptions.auth
# Directory authentication error taxonomy

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.exceptions.base import CoreException
from rest_framework import status
################################################################################


class DirectoryAuthError(CoreException):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	default_detail = "Directory Authentication Error"
	default_code = "directory_auth_error"


class DirectoryConfigurationError(DirectoryAuthError):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	default_detail = "Directory Authentication is not properly configured"
	default_code = "directory_config_err"


class DirectoryTransportError(DirectoryAuthError):
	status_code = status.HTTP_503_SERVICE_UNAVAILABLE
	default_detail = "Could not communicate with the Directory Server"
	default_code = "directory_transport_err"


class DirectoryCredentialError(DirectoryAuthError):
	status_code = status.HTTP_401_UNAUTHORIZED
	default_detail = "Directory Server rejected the credentials"
	default_code = "directory_credential_err"


class DirectoryLookupError(DirectoryAuthError):
	status_code = status.HTTP_401_UNAUTHORIZED
	default_detail = "Could not resolve user in Directory"
	default_code = "directory_lookup_err"


class DirectoryPolicyError(DirectoryAuthError):
	status_code = status.HTTP_403_FORBIDDEN
	default_detail = "User is not a member of required security group"
	default_code = "directory_policy_err"
