################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.ldap.account
# Account name normalization for directory binds and lookups

# ---------------------------------- IMPORTS --------------------------------- #
from typing import NamedTuple
################################################################################

DOMAIN_SEPARATOR = "\\"
REALM_SEPARATOR = "@"


class AccountName(NamedTuple):
	# Identifier used to bind against the directory
	principal: str
	# Bare login used to search the directory
	login: str


def extract_login(name: str) -> str:
	"""Strip the domain part of an account name.

	The account name can be given as 'domain\\login', 'login@domain'
	or just 'login'.
	"""
	if DOMAIN_SEPARATOR in name:
		return name.split(DOMAIN_SEPARATOR, 1)[1]
	if REALM_SEPARATOR in name:
		return name.split(REALM_SEPARATOR, 1)[0]
	return name


def normalize_account_name(
	name: str,
	domain: str = None,
	alternate_principal: bool = False,
) -> AccountName:
	"""Returns the bind principal and search login for an account name.

	When a domain is given, bare logins are prefixed with it so they can
	be used as an Active Directory down-level logon name (DOMAIN\\login).
	In alternate principal mode (userPrincipalName lookups) the account name
	is used unchanged for both.
	"""
	if alternate_principal:
		return AccountName(principal=name, login=name)

	principal = name
	if domain and DOMAIN_SEPARATOR not in name and REALM_SEPARATOR not in name:
		principal = f"{domain}{DOMAIN_SEPARATOR}{name}"
	return AccountName(principal=principal, login=extract_login(name))
