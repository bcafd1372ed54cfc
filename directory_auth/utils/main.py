################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.utils.main
# Contains extra utilities and functions

# ---------------------------------- IMPORTS --------------------------------- #
from typing import Any, Mapping, overload
################################################################################

_NOT_SET = object()


def getldapattrvalues(attributes: Mapping, attr: str) -> list | None:
	"""Get all values of an attribute from an ldap3 search response entry.

	Attribute names are matched case-insensitively. Single values are
	returned wrapped in a list.

	Returns:
		list | None: Attribute values, None if the attribute is not present.
	"""
	if attributes is None:
		return None
	value = _NOT_SET
	if attr in attributes:
		value = attributes[attr]
	else:
		for k, v in attributes.items():
			if isinstance(k, str) and k.lower() == attr.lower():
				value = v
				break
	if value is _NOT_SET or value is None:
		return None
	if isinstance(value, (list, tuple)):
		return list(value)
	return [value]


@overload
def getldapattrvalue(attributes: Mapping, attr: str, /) -> Any: ...


@overload
def getldapattrvalue(attributes: Mapping, attr: str, /, default=None) -> Any: ...


def getldapattrvalue(attributes: Mapping, attr: str, /, *args, **kwargs) -> Any:
	"""Get the first value of an LDAP Attribute with optional default

	Args:
		attributes (Mapping): ldap3 response entry attributes.
		attr (str): Attribute key.
		default: Optional. Returned when the attribute has no values.

	Raises:
		KeyError: Raised when the attribute is missing and no default was
		given.

	Returns:
		Any: First attribute value.
	"""
	values = getldapattrvalues(attributes, attr)
	if values:
		return values[0]
	if "default" in kwargs:
		return kwargs["default"]
	if len(args) > 0:
		return args[0]
	raise KeyError(attr)
