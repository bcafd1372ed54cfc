import pytest
from pytest_mock import MockType, MockerFixture
from ldap3 import Server, Connection
from directory_auth.config.settings import DirectoryAuthSettings
from directory_auth.constants.attrs import AUTH_MODE_ACTIVE_DIRECTORY, AUTH_MODE_LDAP
from typing import Protocol

TEST_SEARCH_BASE = "CN=Users,DC=example,DC=com"
TEST_SERVICE_DN = "CN=svc-auth,CN=Users,DC=example,DC=com"


class ResponseEntryFactory(Protocol):
	def __call__(self, dn: str = ..., **attributes) -> dict: ...


@pytest.fixture
def f_settings() -> DirectoryAuthSettings:
	return DirectoryAuthSettings(
		LDAP_AUTH_MODE=AUTH_MODE_ACTIVE_DIRECTORY,
		LDAP_AUTH_URL="ldap://ad1.example.com",
		LDAP_AUTH_PORT=389,
		LDAP_AUTH_SEARCH_BASE=TEST_SEARCH_BASE,
		LDAP_AUTH_ACTIVE_DIRECTORY_DOMAIN="EXAMPLE",
		LDAP_AUTH_FALLBACK=True,
		LDAP_AUTH_CREATE_ACCOUNT=False,
	)


@pytest.fixture
def f_ldap_settings(f_settings: DirectoryAuthSettings) -> DirectoryAuthSettings:
	return f_settings._replace(
		LDAP_AUTH_MODE=AUTH_MODE_LDAP,
		LDAP_AUTH_URL="ldap://ldap.example.com",
		LDAP_AUTH_SEARCH_BASE="OU=people,DC=example,DC=com",
		LDAP_AUTH_SEARCH_FILTER="(uid=%name%)",
	)


@pytest.fixture
def f_server(mocker: MockerFixture) -> MockType:
	return mocker.MagicMock(spec=Server)


def make_ldap_connection(mocker: MockerFixture) -> MockType:
	m_connection = mocker.MagicMock(spec=Connection)
	# ldap3 binds open per instance in Connection.__init__, the class has none
	m_connection.open = mocker.MagicMock(return_value=None)
	m_connection.bind.return_value = True
	m_connection.search.return_value = True
	m_connection.response = []
	m_connection.result = {"result": 0, "description": "success"}
	return m_connection


@pytest.fixture
def f_ldap_connection(mocker: MockerFixture) -> MockType:
	return make_ldap_connection(mocker)


@pytest.fixture
def f_ldap3_server(mocker: MockerFixture, f_server: MockType) -> MockType:
	return mocker.patch("directory_auth.ldap.connector.ldap3.Server", return_value=f_server)


@pytest.fixture
def f_ldap3_connection(
	mocker: MockerFixture, f_ldap3_server: MockType, f_ldap_connection: MockType
) -> MockType:
	"""Patches ldap3.Connection, every instantiation returns f_ldap_connection"""
	return mocker.patch(
		"directory_auth.ldap.connector.ldap3.Connection",
		return_value=f_ldap_connection,
	)


@pytest.fixture
def f_response_entry() -> ResponseEntryFactory:
	def maker(dn: str = f"CN=Bob Example,{TEST_SEARCH_BASE}", **attributes) -> dict:
		return {
			"type": "searchResEntry",
			"dn": dn,
			"attributes": attributes,
			"raw_attributes": {},
		}

	return maker
