import json

from pubnub_rest.config import DEFAULT_ORIGIN, Config, load_config, save_config


def test_defaults():
    config = Config()
    assert config.origin == DEFAULT_ORIGIN
    assert config.uuid.startswith("pn-")
    assert config.secret_key is None
    assert Config().uuid != config.uuid


def test_load_missing_file(tmp_path):
    config = load_config(tmp_path / "nope.json", env={})
    assert config.subscribe_key == ""


def test_load_malformed_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert load_config(path, env={}).publish_key == ""


def test_env_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"subscribe_key": "sub-file", "publish_key": "pub-file", "unknown": 1}))
    config = load_config(path, env={"PUBNUB_SUBSCRIBE_KEY": "sub-env", "PUBNUB_CIPHER_KEY": "enigma"})
    assert config.subscribe_key == "sub-env"
    assert config.publish_key == "pub-file"
    assert config.cipher_key == "enigma"


def test_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_config(Config(subscribe_key="s", publish_key="p", uuid="me"), path)
    config = load_config(path, env={})
    assert (config.subscribe_key, config.publish_key, config.uuid) == ("s", "p", "me")
    assert "secret_key" not in json.loads(path.read_text())


def test_config_is_mutable_between_requests():
    config = Config(auth_key="old")
    config.auth_key = "new"
    assert config.auth_key == "new"
