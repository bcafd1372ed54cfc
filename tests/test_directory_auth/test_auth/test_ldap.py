import pytest
from pytest_mock import MockType, MockerFixture
from ldap3 import ANONYMOUS as ldap3_ANONYMOUS, SIMPLE as ldap3_SIMPLE
from ldap3.core.exceptions import LDAPInvalidCredentialsResult, LDAPSocketOpenError
from directory_auth.auth.ldap import (
	authenticate,
	get_user_entry,
	MSG_USER_NOT_RETRIEVED,
	MSG_USER_NOT_VALIDATED,
)
from directory_auth.auth.result import AuthResultSuccess, AuthResultFallback
from directory_auth.exceptions.auth import (
	DirectoryConfigurationError,
	DirectoryCredentialError,
	DirectoryLookupError,
	DirectoryPolicyError,
	DirectoryTransportError,
)
from tests.test_directory_auth.conftest import TEST_SERVICE_DN, make_ldap_connection

PASSWORD = "s3cret"
SERVICE_PASSWORD = "service-pass"
BOB_DN = "uid=bob,OU=people,DC=example,DC=com"


@pytest.fixture
def f_service_settings(f_ldap_settings):
	return f_ldap_settings._replace(
		LDAP_AUTH_CONNECTION_USER_DN=TEST_SERVICE_DN,
		LDAP_AUTH_CONNECTION_PASSWORD=SERVICE_PASSWORD,
	)


@pytest.fixture
def f_bob_entry(f_response_entry):
	return f_response_entry(
		dn=BOB_DN,
		displayName=["Bob Example"],
		mail=["bob@example.com"],
		memberOf=["cn=staff,ou=groups,dc=example,dc=com"],
	)


@pytest.fixture
def f_search_connection(mocker: MockerFixture, f_bob_entry) -> MockType:
	m_connection = make_ldap_connection(mocker)
	m_connection.response = [f_bob_entry]
	return m_connection


@pytest.fixture
def f_user_connection(mocker: MockerFixture) -> MockType:
	return make_ldap_connection(mocker)


@pytest.fixture
def f_connections(
	mocker: MockerFixture,
	f_ldap3_server: MockType,
	f_search_connection: MockType,
	f_user_connection: MockType,
) -> MockType:
	"""Patches ldap3.Connection, returning the search connection then the user one"""
	return mocker.patch(
		"directory_auth.ldap.connector.ldap3.Connection",
		side_effect=[f_search_connection, f_user_connection],
	)


def test_authenticate_success(
	f_service_settings,
	f_connections: MockType,
	f_search_connection: MockType,
	f_user_connection: MockType,
):
	result = authenticate("bob", PASSWORD, settings=f_service_settings)

	assert result == AuthResultSuccess(email="bob@example.com", name="Bob Example")
	assert f_connections.call_count == 2
	service_call, user_call = f_connections.call_args_list
	assert service_call.kwargs["user"] == TEST_SERVICE_DN
	assert service_call.kwargs["password"] == SERVICE_PASSWORD
	assert service_call.kwargs["authentication"] == ldap3_SIMPLE
	assert user_call.kwargs["user"] == BOB_DN
	assert user_call.kwargs["password"] == PASSWORD

	f_search_connection.search.assert_called_once()
	search_kwargs = f_search_connection.search.call_args.kwargs
	assert search_kwargs["search_base"] == "OU=people,DC=example,DC=com"
	assert search_kwargs["search_filter"] == "(uid=bob)"
	f_user_connection.search.assert_not_called()
	f_search_connection.unbind.assert_called_once()
	f_user_connection.unbind.assert_called_once()


def test_authenticate_anonymous_search(
	f_ldap_settings,
	f_connections: MockType,
	f_search_connection: MockType,
):
	result = authenticate("bob", PASSWORD, settings=f_ldap_settings)

	assert result.email == "bob@example.com"
	service_call, user_call = f_connections.call_args_list
	assert service_call.kwargs["user"] is None
	assert service_call.kwargs["authentication"] == ldap3_ANONYMOUS
	assert user_call.kwargs["authentication"] == ldap3_SIMPLE
	f_search_connection.unbind.assert_called_once()


def test_authenticate_anonymous_search_not_allowed(f_ldap_settings, f_connections):
	settings = f_ldap_settings._replace(LDAP_AUTH_ALLOW_ANONYMOUS_BIND=False)
	with pytest.raises(DirectoryConfigurationError):
		authenticate("bob", PASSWORD, settings=settings)
	f_connections.assert_not_called()


@pytest.mark.parametrize(
	"account_name, normalize, expected_filter",
	(
		("EXAMPLE\\bob", False, "(uid=EXAMPLE\\5cbob)"),
		("EXAMPLE\\bob", True, "(uid=bob)"),
		("bob@corp", True, "(uid=bob)"),
		("bob*", False, "(uid=bob\\2a)"),
	),
)
def test_get_user_entry_filter(
	f_service_settings,
	f_connections,
	f_search_connection,
	f_bob_entry,
	account_name,
	normalize,
	expected_filter,
):
	settings = f_service_settings._replace(LDAP_AUTH_NORMALIZE_SEARCH_NAME=normalize)
	assert get_user_entry(account_name, settings) == f_bob_entry
	assert f_search_connection.search.call_args.kwargs["search_filter"] == expected_filter


def test_authenticate_fallback_before_directory(f_service_settings, f_connections):
	result = authenticate("bob@example.com", PASSWORD, settings=f_service_settings)
	assert result == AuthResultFallback()
	f_connections.assert_not_called()


@pytest.mark.parametrize("password", ("", None))
def test_authenticate_requires_password(f_service_settings, f_connections, password):
	with pytest.raises(DirectoryCredentialError):
		authenticate("bob", password, settings=f_service_settings)
	f_connections.assert_not_called()


def test_authenticate_wrong_password(
	f_service_settings,
	f_connections,
	f_search_connection,
	f_user_connection,
):
	f_user_connection.bind.side_effect = LDAPInvalidCredentialsResult(
		result=49, description="invalidCredentials"
	)
	with pytest.raises(DirectoryCredentialError) as exc_info:
		authenticate("bob", PASSWORD, settings=f_service_settings)

	assert exc_info.value.message == MSG_USER_NOT_VALIDATED
	f_search_connection.unbind.assert_called_once()
	f_user_connection.unbind.assert_called_once()


def test_authenticate_user_bind_rejected(f_service_settings, f_connections, f_user_connection):
	f_user_connection.bind.return_value = False
	with pytest.raises(DirectoryCredentialError) as exc_info:
		authenticate("bob", PASSWORD, settings=f_service_settings)
	assert exc_info.value.message == MSG_USER_NOT_VALIDATED
	f_user_connection.unbind.assert_called_once()


def test_authenticate_user_bind_transport_failure(
	f_service_settings, f_connections, f_user_connection
):
	f_user_connection.open.side_effect = LDAPSocketOpenError("unable to open socket")
	with pytest.raises(DirectoryTransportError):
		authenticate("bob", PASSWORD, settings=f_service_settings)
	f_user_connection.unbind.assert_called_once()


def test_authenticate_service_bind_failure(
	f_service_settings, f_connections, f_search_connection, f_user_connection
):
	f_search_connection.bind.return_value = False
	f_search_connection.result = {"result": 49, "description": "invalidCredentials"}
	with pytest.raises(DirectoryCredentialError) as exc_info:
		authenticate("bob", PASSWORD, settings=f_service_settings)

	assert exc_info.value.message == MSG_USER_NOT_RETRIEVED % "Bind: invalidCredentials"
	assert f_connections.call_count == 1
	f_search_connection.search.assert_not_called()
	f_search_connection.unbind.assert_called_once()


@pytest.mark.parametrize("count", (0, 2))
def test_authenticate_user_not_found(
	f_service_settings, f_connections, f_search_connection, f_bob_entry, count
):
	f_search_connection.response = [f_bob_entry] * count
	with pytest.raises(DirectoryLookupError) as exc_info:
		authenticate("bob", PASSWORD, settings=f_service_settings)

	assert exc_info.value.message.endswith("(failed to retrieve user object)")
	assert f_connections.call_count == 1
	f_search_connection.unbind.assert_called_once()


def test_authenticate_missing_email(
	f_service_settings, f_connections, f_search_connection, f_response_entry
):
	f_search_connection.response = [f_response_entry(dn=BOB_DN, displayName=["Bob"])]
	with pytest.raises(DirectoryLookupError):
		authenticate("bob", PASSWORD, settings=f_service_settings)


def test_authenticate_default_name(
	f_service_settings, f_connections, f_search_connection, f_response_entry
):
	f_search_connection.response = [f_response_entry(dn=BOB_DN, mail=["bob@example.com"])]
	assert authenticate("EXAMPLE\\bob", PASSWORD, settings=f_service_settings).name == "bob"


class TestMembership:
	def test_member(self, f_service_settings, f_connections, f_search_connection):
		settings = f_service_settings._replace(LDAP_AUTH_MEMBERSHIP=r"^cn=staff,")
		assert authenticate("bob", PASSWORD, settings=settings).email == "bob@example.com"
		assert "memberOf" in f_search_connection.search.call_args.kwargs["attributes"]

	def test_not_member(self, f_service_settings, f_connections, f_user_connection):
		settings = f_service_settings._replace(LDAP_AUTH_MEMBERSHIP=r"^cn=admins,")
		with pytest.raises(DirectoryPolicyError):
			authenticate("bob", PASSWORD, settings=settings)
		# Membership is only checked once the password is verified
		f_user_connection.bind.assert_called_once()
