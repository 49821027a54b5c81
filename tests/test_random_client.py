"""
Testing the random.org client without the network
- Tool: monkeypatch swaps requests.get for a fake that returns canned bodies.
"""

import requests

import coldhot.random_client as random_client

class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code != 200:
            raise requests.HTTPError(f"{self.status_code} error")

def make_fake_get(bodies):
    """Returns a fake requests.get that hands out the given bodies in order."""
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append(params)
        return FakeResponse(bodies[len(calls) - 1])

    fake_get.calls = calls
    return fake_get

def test_secret_from_random_org_sequences(monkeypatch):
    # 1..9 shuffled -> first digit 7; 0..9 shuffled -> drop 7, take 0 and 3
    fake_get = make_fake_get([
        "7\n2\n9\n1\n3\n4\n5\n6\n8\n",
        "7\n0\n3\n9\n1\n2\n4\n5\n6\n8\n",
    ])
    monkeypatch.setattr(random_client.requests, "get", fake_get)

    assert random_client.fetch_secret("random_org") == "703"
    assert fake_get.calls[0]["min"] == 1 and fake_get.calls[0]["max"] == 9
    assert fake_get.calls[1]["min"] == 0 and fake_get.calls[1]["max"] == 9

def test_falls_back_when_offline(monkeypatch):
    def offline(*args, **kwargs):
        raise requests.ConnectionError("no internet")

    monkeypatch.setattr(random_client.requests, "get", offline)
    monkeypatch.setattr(random_client, "generate_secret", lambda: "512")

    assert random_client.fetch_secret("random_org") == "512"

def test_falls_back_on_malformed_sequence(monkeypatch):
    # duplicate 1, missing 9
    monkeypatch.setattr(random_client.requests, "get", make_fake_get(["1\n1\n2\n3\n4\n5\n6\n7\n8\n"]))
    monkeypatch.setattr(random_client, "generate_secret", lambda: "640")

    assert random_client.fetch_secret("random_org") == "640"

def test_falls_back_on_http_error(monkeypatch):
    monkeypatch.setattr(random_client.requests, "get", lambda *a, **k: FakeResponse("", status=503))
    monkeypatch.setattr(random_client, "generate_secret", lambda: "908")

    assert random_client.fetch_secret("random_org") == "908"

def test_local_source_never_calls_network(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("network used")

    monkeypatch.setattr(random_client.requests, "get", boom)
    secret = random_client.fetch_secret("local")
    assert len(secret) == 3 and secret[0] != "0" and len(set(secret)) == 3

def test_source_defaults_to_settings(monkeypatch):
    monkeypatch.setenv("RANDOM_SOURCE", "local")
    monkeypatch.setattr(random_client, "generate_secret", lambda: "321")
    assert random_client.fetch_secret() == "321"
