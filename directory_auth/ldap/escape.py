################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.escape
# Contains:
# - LDAP Filter value escaping (through ldap3)
# - Distinguished Name and full hex value escaping
# - Hex escape sequence decoding

# ---------------------------------- IMPORTS --------------------------------- #
from ldap3.utils.conv import escape_filter_chars
from enum import IntFlag
import re
################################################################################


class LDAPEscapeMode(IntFlag):
	"""Selects which character table ldap_escape applies"""
	NONE = 0
	FILTER = 1
	DN = 2


LDAP_ESCAPE_DN_CHARS = ("\\", ",", "=", "+", "<", ">", ";", '"', "#", "\r")
LDAP_ESCAPE_SPACE = "\\20"
LDAP_HEX_ESCAPE_RE = re.compile(r"((?:\\[0-9a-fA-F]{2})+)")


def _hex_escape(c: str) -> str:
	return "".join(f"\\{b:02x}" for b in c.encode("utf-8"))


def _escape_char(c: str, mode: LDAPEscapeMode) -> str:
	if mode == LDAPEscapeMode.NONE:
		return _hex_escape(c)
	if mode & LDAPEscapeMode.DN and c in LDAP_ESCAPE_DN_CHARS:
		return _hex_escape(c)
	if mode & LDAPEscapeMode.FILTER:
		return escape_filter_chars(c)
	return c


def ldap_escape(
	value: str,
	ignore: str = "",
	mode: LDAPEscapeMode = LDAPEscapeMode.NONE,
) -> str:
	"""Escape a value for interpolation into an LDAP filter or DN.

	Every escaped byte is written as a backslash followed by its two digit
	lowercase hexadecimal code. Filter escaping is delegated to ldap3, DN
	and full escaping (no mode) use the hex form of the UTF-8 bytes.

	Args:
		value (str): Value to escape.
		ignore (str): Characters that must be left untouched.
		mode (LDAPEscapeMode): FILTER, DN or both.

	Raises:
		TypeError: Raised when value is not a string.

	Returns:
		str: Escaped value.
	"""
	if not isinstance(value, str):
		raise TypeError("ldap_escape value must be of type str.")
	if not isinstance(mode, LDAPEscapeMode):
		mode = LDAPEscapeMode(mode)

	if mode == LDAPEscapeMode.FILTER and not ignore:
		result = escape_filter_chars(value)
	else:
		result = "".join(c if c in ignore else _escape_char(c, mode) for c in value)

	if mode & LDAPEscapeMode.DN and result:
		if result[0] == " " and " " not in ignore:
			result = LDAP_ESCAPE_SPACE + result[1:]
		if result[-1] == " " and " " not in ignore:
			result = result[:-1] + LDAP_ESCAPE_SPACE
	return result


def ldap_escape_filter(value: str, ignore: str = "") -> str:
	return ldap_escape(value, ignore=ignore, mode=LDAPEscapeMode.FILTER)


def ldap_escape_dn(value: str, ignore: str = "") -> str:
	return ldap_escape(value, ignore=ignore, mode=LDAPEscapeMode.DN)


def ldap_unescape(value: str) -> str:
	"""Decode backslash hex escape sequences produced by ldap_escape.

	Raises:
		TypeError: Raised when value is not a string.
		ValueError: Raised when an escaped byte run is not valid UTF-8.
	"""
	if not isinstance(value, str):
		raise TypeError("ldap_unescape value must be of type str.")

	def _decode(match: re.Match) -> str:
		raw = bytes.fromhex(match.group(1).replace("\\", ""))
		try:
			return raw.decode("utf-8", errors="strict")
		except UnicodeDecodeError as e:
			raise ValueError(f"Escaped sequence {match.group(1)} is not valid UTF-8.") from e

	return LDAP_HEX_ESCAPE_RE.sub(_decode, value)
