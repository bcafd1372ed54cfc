################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.exceptions.base

# ---------------------------------- IMPORTS --------------------------------- #
from rest_framework.exceptions import APIException
################################################################################


class CoreException(APIException):
	def __init__(self, data=None):
		super().__init__()
		if data is not None:
			self.set_detail(data)
		else:
			self.detail = {
				"code": self.default_code,
				"detail": self.default_detail,
			}

	def set_detail(self, data):
		self.detail = data
		if isinstance(self.detail, dict):
			if "code" not in self.detail:
				self.detail["code"] = self.default_code
			if "detail" not in self.detail:
				self.detail["detail"] = self.default_detail

	@property
	def message(self) -> str:
		"""Human readable diagnostic, falls back to the default detail."""
		if isinstance(self.detail, dict):
			return str(self.detail.get("message", self.detail.get("detail")))
		return str(self.detail)

	def __str__(self) -> str:
		return self.message
