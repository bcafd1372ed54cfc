################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.filter
# Contains:
# - LDAP Filter construction
# - Search filter template rendering

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.constants.attrs import SEARCH_FILTER_PLACEHOLDER
from directory_auth.ldap.escape import ldap_escape_filter
################################################################################


def is_encapsulated(v: str) -> bool:
	"""Check if a string is wrapped in parentheses."""
	if not isinstance(v, str):
		raise TypeError("is_encapsulated value must be of type str.")
	return v.startswith("(") and v.endswith(")")


def encapsulate(v: str) -> str:
	"""Properly encapsulate LDAP filter string"""
	if is_encapsulated(v):
		return v
	return ("" if v.startswith("(") else "(") + v + ("" if v.endswith(")") else ")")


def is_balanced(v: str) -> bool:
	"""Check that every parenthesis in a filter string is matched."""
	depth = 0
	for c in v:
		if c == "(":
			depth += 1
		elif c == ")":
			depth -= 1
			if depth < 0:
				return False
	return depth == 0


class LDAPFilter:
	"""LDAP Equality Filter Constructor class

	Values are escaped when the filter is rendered, so callers pass raw
	attribute values.
	"""
	def __init__(self, attribute: str, value: str):
		self.attribute = attribute
		self.value = value

	def to_string(self) -> str:
		"""Convert filter to LDAP filter string"""
		return encapsulate(f"{self.attribute}={ldap_escape_filter(self.value)}")

	@classmethod
	def eq(cls, attribute: str, value: str) -> "LDAPFilter":
		"""LDAP Filter Equality Comparison, requires attribute and value.

		Checks for LDAP Attribute exact value match in object attribute field.

		Args:
			attribute (str): LDAP Attribute Field
			value (str): LDAP Attribute Value, escaped on render

		Returns:
			LDAPFilter: Corresponding LDAP Filter.
		"""
		return cls(attribute=attribute, value=value)

	def __str__(self) -> str:
		return self.to_string()

	def __repr__(self) -> str:
		return f"LDAPFilter(attribute={self.attribute}, value={self.value})"


def validate_filter_template(template: str) -> None:
	"""Raises ValueError when a search filter template is unusable."""
	if not isinstance(template, str):
		raise TypeError("Search filter template must be of type str.")
	if SEARCH_FILTER_PLACEHOLDER not in template:
		raise ValueError(
			f"Search filter template must contain the {SEARCH_FILTER_PLACEHOLDER} placeholder."
		)
	template = template.strip()
	if not is_encapsulated(template) or not is_balanced(template):
		raise ValueError("Search filter template must be a parenthesized LDAP filter.")


def render_search_filter(template: str, name: str) -> str:
	"""Replace every placeholder in a filter template with the escaped name."""
	return template.strip().replace(SEARCH_FILTER_PLACEHOLDER, ldap_escape_filter(name))
