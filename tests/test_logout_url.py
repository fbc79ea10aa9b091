# tests/test_logout_url.py
import pytest

from pkg_keycloak.application.use_cases.build_logout_url import (
    BuildLogoutUrlUseCase,
    BuildStaticLogoutUrlUseCase,
    logout_convention,
    split_key_value_params,
)
from pkg_keycloak.domain.constants import LogoutConvention
from pkg_keycloak.domain.exceptions import InvalidArgumentError
from pkg_keycloak.domain.value_objects import LogoutRequest

LOGOUT = "https://idp.example/realms/acme/protocol/openid-connect/logout"


@pytest.fixture
def builder() -> BuildLogoutUrlUseCase:
    return BuildLogoutUrlUseCase(logout_url=LOGOUT)


def test_no_redirect_returns_bare_url(builder):
    assert builder.build() == LOGOUT
    assert builder.build(None, client_id="c1", id_token_hint="t1") == LOGOUT
    assert builder.build(None, extra_params=[{"foo": "bar"}]) == LOGOUT


def test_redirect_only_uses_legacy_parameter(builder):
    assert builder.build("https://app/cb") == f"{LOGOUT}?redirect_uri=https%3A%2F%2Fapp%2Fcb"


def test_legacy_form_ignores_extra_params(builder):
    url = builder.build("https://app/cb", extra_params=[{"foo": "bar"}])
    assert url == f"{LOGOUT}?redirect_uri=https%3A%2F%2Fapp%2Fcb"


def test_rp_initiated_logout(builder):
    url = builder.build("https://app/cb", "c1", "t1", [{"foo": "bar"}])
    assert url == (
        f"{LOGOUT}?post_logout_redirect_uri=https%3A%2F%2Fapp%2Fcb"
        "&client_id=c1&id_token_hint=t1&foo=bar"
    )


def test_rp_initiated_with_client_id_only(builder):
    url = builder.build("https://app/cb", client_id="my app")
    assert url == f"{LOGOUT}?post_logout_redirect_uri=https%3A%2F%2Fapp%2Fcb&client_id=my+app"


def test_rp_initiated_with_id_token_only(builder):
    url = builder.build("https://app/cb", id_token_hint="a.b/c")
    assert url == f"{LOGOUT}?post_logout_redirect_uri=https%3A%2F%2Fapp%2Fcb&id_token_hint=a.b%2Fc"


def test_extra_params_keep_order_and_are_encoded(builder):
    url = builder.build(
        "https://app/cb",
        client_id="c1",
        extra_params=[{"ui_locales": "de fr"}, ("state", "x&y=z"), {"kc_idp_hint": "google"}],
    )
    assert url.endswith("&ui_locales=de+fr&state=x%26y%3Dz&kc_idp_hint=google")


def test_multi_key_extra_param_is_rejected(builder):
    with pytest.raises(InvalidArgumentError):
        builder.build("https://app/cb", "c1", "t1", [{"a": "1", "b": "2"}])


def test_malformed_extra_params_rejected_even_without_redirect(builder):
    with pytest.raises(InvalidArgumentError):
        builder.build(extra_params=[{"a": "1", "b": "2"}])


def test_logout_convention():
    assert logout_convention(LogoutRequest()) is LogoutConvention.BARE
    assert logout_convention(LogoutRequest("https://app/cb")) is LogoutConvention.LEGACY
    assert logout_convention(LogoutRequest("https://app/cb", "c1")) is LogoutConvention.RP_INITIATED
    assert logout_convention(LogoutRequest("https://app/cb", None, "t")) is LogoutConvention.RP_INITIATED


def test_static_variant_does_not_encode_id_token():
    uc = BuildStaticLogoutUrlUseCase(logout_url=LOGOUT, post_logout_redirect_uri="https://app/bye")
    assert uc.execute("a.b/c+d") == (
        f"{LOGOUT}?id_token_hint=a.b/c+d&post_logout_redirect_uri=https%3A%2F%2Fapp%2Fbye"
    )


def test_split_key_value_params():
    assert split_key_value_params(["a=1", "b=x=y", "c="]) == (("a", "1"), ("b", "x=y"), ("c", ""))

    with pytest.raises(InvalidArgumentError):
        split_key_value_params(["novalue"])
    with pytest.raises(InvalidArgumentError):
        split_key_value_params(["=1"])
