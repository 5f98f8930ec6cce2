from __future__ import annotations

import pytest

from wifiqr.credentials import (
    CredentialError,
    CredentialRecord,
    IncompatibleAuthPassword,
    MissingRequiredPassword,
    build_wifi_payload,
    escape,
    normalize_auth,
)

ESCAPED_SSID = r'"foo;bar\baz"'


def test_format_basic_credentials():
    record = CredentialRecord(ssid="test", password="password", auth="WPA2")
    assert record.format() == "WIFI:T:WPA2;S:test;P:password;;"


def test_format_escapes_reserved_characters():
    record = CredentialRecord(ssid=ESCAPED_SSID, password="randompassword", auth="wpa2")
    assert record.format() == r'WIFI:T:WPA2;S:\"foo\;bar\\baz\";P:randompassword;;'


def test_format_hidden_ssid():
    record = CredentialRecord(ssid=ESCAPED_SSID, password="randompassword", auth="WPA2", hidden=True)
    assert record.format() == r'WIFI:T:WPA2;S:\"foo\;bar\\baz\";P:randompassword;H:true;;'


def test_format_nopass():
    record = CredentialRecord(ssid="test", password="", auth="nopass")
    assert record.format() == "WIFI:T:nopass;S:test;;"


def test_format_nopass_hidden():
    record = CredentialRecord(ssid="test", password="", auth="nopass", hidden=True)
    assert record.format() == "WIFI:T:nopass;S:test;H:true;;"


def test_format_empty_auth_means_nopass():
    assert CredentialRecord(ssid="test").format() == "WIFI:T:nopass;S:test;;"


def test_format_nopass_any_case():
    record = CredentialRecord(ssid="test", password="", auth="NoPass")
    assert record.format() == "WIFI:T:nopass;S:test;;"


def test_format_quotes_plain_values():
    record = CredentialRecord(ssid="test", password="password", auth="wpa2", quote=True)
    assert record.format() == 'WIFI:T:WPA2;S:"test";P:"password";;'


def test_format_quote_skips_escaped_values():
    record = CredentialRecord(ssid="foo;bar", password="deadbeef", auth="wpa", quote=True)
    assert record.format() == r'WIFI:T:WPA;S:foo\;bar;P:"deadbeef";;'


def test_format_quote_nopass_quotes_ssid_only():
    record = CredentialRecord(ssid="cafe", auth="nopass", quote=True)
    assert record.format() == 'WIFI:T:nopass;S:"cafe";;'


@pytest.mark.parametrize(
    "auth, expected",
    [
        ("wep", "WIFI:T:WEP;S:test;P:password;;"),
        ("WPA", "WIFI:T:WPA;S:test;P:password;;"),
        ("wpa2", "WIFI:T:WPA2;S:test;P:password;;"),
        ("wpa3", "WIFI:T:WPA3;S:test;P:password;;"),
        ("sae", "WIFI:T:SAE;S:test;P:password;;"),
    ],
)
def test_format_uppercases_auth(auth: str, expected: str):
    assert CredentialRecord(ssid="test", password="password", auth=auth).format() == expected


def test_format_escapes_auth_tag():
    record = CredentialRecord(ssid="test", password="password", auth="wpa;x")
    assert record.format() == r"WIFI:T:WPA\;X;S:test;P:password;;"


@pytest.mark.parametrize("auth", ["wpa", "wpa2", "wep", "WPA3"])
def test_password_required(auth: str):
    with pytest.raises(MissingRequiredPassword):
        CredentialRecord(ssid="bane", password="", auth=auth).format()


@pytest.mark.parametrize("auth", ["", "nopass", "NOPASS"])
def test_nopass_rejects_password(auth: str):
    with pytest.raises(IncompatibleAuthPassword):
        CredentialRecord(ssid=ESCAPED_SSID, password="password", auth=auth).format()


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError) as excinfo:
        CredentialRecord(ssid="bane", password="", auth="wpa").format()
    assert isinstance(excinfo.value, CredentialError)
    assert "WPA requires a password" in str(excinfo.value)


def test_format_is_idempotent():
    record = CredentialRecord(ssid='a"b', password="p:w", auth="wpa2", hidden=True, quote=True)
    assert record.format() == record.format()


def test_escape_each_reserved_character_once():
    assert escape('a\\b"c;d:e') == 'a\\\\b\\"c\\;d\\:e'
    assert escape("plain, text!") == "plain, text!"


def test_escape_backslash_first():
    assert escape('\\"') == '\\\\\\"'


@pytest.mark.parametrize(
    "token, expected",
    [("", "nopass"), ("nopass", "nopass"), ("NOPASS", "NOPASS"), ("wpa2", "WPA2"), ("Wep", "WEP")],
)
def test_normalize_auth(token: str, expected: str):
    assert normalize_auth(token) == expected


def test_build_wifi_payload():
    assert build_wifi_payload("HomeNet", password="hunter22") == "WIFI:T:WPA2;S:HomeNet;P:hunter22;;"
    assert build_wifi_payload("Cafe", auth="nopass", hidden=True) == "WIFI:T:nopass;S:Cafe;H:true;;"
