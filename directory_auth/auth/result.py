################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth.result
# Contains the authentication outcomes returned to the host application.
# Errors are raised as directory_auth.exceptions.auth exceptions instead.

# ---------------------------------- IMPORTS --------------------------------- #
from enum import Enum
from typing import NamedTuple, Union
################################################################################


class AuthResultType(Enum):
	SUCCESS = "success"
	FALLBACK = "fallback"


class AuthResultSuccess(NamedTuple):
	"""The directory verified the credentials."""
	email: str
	name: str
	create_account: bool = False

	@property
	def type(self) -> AuthResultType:
		return AuthResultType.SUCCESS


class AuthResultFallback(NamedTuple):
	"""The host application should verify the credentials itself."""

	@property
	def type(self) -> AuthResultType:
		return AuthResultType.FALLBACK


AuthResult = Union[AuthResultSuccess, AuthResultFallback]
