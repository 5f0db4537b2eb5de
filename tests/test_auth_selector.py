"""
Tests for choosing an auth method from connection properties
"""

import pytest

from flightconnect.auth.methods import BasicCredentialAuthMethod, BearerTokenAuthMethod
from flightconnect.auth.oauth import BrowserOAuthAuthMethod
from flightconnect.auth.selector import resolve_auth_method, resolve_endpoint
from flightconnect.exceptions import ConfigurationError
from flightconnect.properties import PropertyMap


def resolve(client, **properties):
    return resolve_auth_method(client, PropertyMap(properties))


class TestExternalAuth:
    """authType=external always selects the browser OAuth flow."""

    def test_external_selected(self, client):
        method = resolve(client, authType="external")

        assert isinstance(method, BrowserOAuthAuthMethod)
        assert method.server == "grpc+tls://localhost:32010"

    def test_external_wins_over_credentials(self, client):
        method = resolve(client, authType="external", uid="admin", pwd="secret", token="abc")

        assert isinstance(method, BrowserOAuthAuthMethod)

    def test_host_port_encryption(self, client):
        method = resolve(client, authType="external", host="db.example.com", port="31337", useEncryption="false")

        assert method.server == "grpc+tcp://db.example.com:31337"

    def test_unparseable_encryption_keeps_default(self, client):
        method = resolve(client, authType="external", useEncryption="sometimes")

        assert method.server.startswith("grpc+tls://")

    @pytest.mark.parametrize("port", ["abc", "", "70000", "0", "-1"])
    def test_malformed_port_is_fatal(self, client, port):
        with pytest.raises(ConfigurationError):
            resolve(client, authType="external", port=port)

    def test_other_auth_type_falls_through(self, client):
        method = resolve(client, authType="basic", token="abc")

        assert isinstance(method, BearerTokenAuthMethod)


class TestBasicCredentials:
    """User/password selection and alias priority."""

    @pytest.mark.parametrize("user_key,password_key", [
        ("user", "password"),
        ("User ID", "Password"),
        ("UID", "PWD"),
        ("uid", "password"),
    ])
    def test_alias_pairs(self, client, user_key, password_key):
        method = resolve_auth_method(client, PropertyMap({user_key: "admin", password_key: "secret"}))

        assert isinstance(method, BasicCredentialAuthMethod)
        assert method.get_user() == "admin"
        assert method._password == "secret"

    def test_user_password_preferred_over_uid_pwd(self, client):
        method = resolve(client, user="primary", password="p1", uid="fallback", pwd="p2")

        assert method.get_user() == "primary"
        assert method._password == "p1"

    def test_user_only_means_blank_password(self, client):
        method = resolve(client, uid="admin")

        assert isinstance(method, BasicCredentialAuthMethod)
        assert method._password == ""

    def test_password_only_means_blank_user(self, client):
        method = resolve(client, pwd="secret")

        assert isinstance(method, BasicCredentialAuthMethod)
        assert method.get_user() == ""

    def test_empty_values_still_select_basic(self, client):
        method = resolve(client, uid="", token="abc")

        assert isinstance(method, BasicCredentialAuthMethod)

    def test_credentials_win_over_token(self, client):
        method = resolve(client, user="admin", password="secret", token="abc")

        assert isinstance(method, BasicCredentialAuthMethod)


class TestTokenAndMissing:
    """Token fallback and the missing-credentials error."""

    def test_token_selected(self, client):
        method = resolve(client, token="abc")

        assert isinstance(method, BearerTokenAuthMethod)
        assert method._token == "abc"

    def test_no_credentials(self, client):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve(client, host="db.example.com")

        assert "credentials are required" in str(exc_info.value)

    def test_no_rpc_during_selection(self, client):
        resolve(client, uid="admin", pwd="secret")

        assert client.method_calls == []


class TestResolveEndpoint:
    """Tests for host/port/encryption defaults."""

    def test_defaults(self):
        assert resolve_endpoint(PropertyMap()) == ("localhost", 32010, True)

    def test_explicit(self):
        props = PropertyMap({"HOST": "db", "Port": " 443 ", "useEncryption": "1"})

        assert resolve_endpoint(props) == ("db", 443, True)

    def test_empty_host_is_kept(self):
        assert resolve_endpoint(PropertyMap({"host": ""})) == ("", 32010, True)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
