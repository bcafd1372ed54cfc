################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.membership
# Contains the group membership policy check

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.exceptions import auth as exc_auth
from directory_auth.utils.main import getldapattrvalues
from typing import Mapping
import logging
import re
################################################################################

logger = logging.getLogger(__name__)


def check_membership(attributes: Mapping, pattern: re.Pattern, attribute: str) -> str:
	"""Verify that one of the entry's group memberships matches pattern.

	Values are tested in order and the first match allows access. A missing
	or malformed membership attribute denies access.

	Raises:
		DirectoryPolicyError: No membership value matched.

	Returns:
		str: The matching membership value.
	"""
	memberships = getldapattrvalues(attributes, attribute)
	if memberships is None:
		raise exc_auth.DirectoryPolicyError(
			data={
				"message": "User is not a member of required security group "
				"(no memberships defined for user)."
			}
		)

	for group in memberships:
		if not isinstance(group, str):
			raise exc_auth.DirectoryPolicyError(
				data={"message": "Could not verify group membership (missing entry)."}
			)
		if pattern.search(group):
			logger.debug("Membership %s matches %s", group, pattern.pattern)
			return group

	raise exc_auth.DirectoryPolicyError(
		data={"message": "User is not a member of required security group."}
	)
