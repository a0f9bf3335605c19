from pathlib import Path
from unittest import mock

import pytest

from pacman_ipfs_sync.cli.arguments import CLIArgumentNamespace
from pacman_ipfs_sync.config import SyncConfig
from pacman_ipfs_sync.constants import defaults
from pacman_ipfs_sync.utils import conf
from pacman_ipfs_sync.utils.conf import _get_file_config as real_get_file_config


def test_defaults():
    config = SyncConfig()
    assert config.cache_dir == Path(defaults.CACHE_DIR)
    assert config.db_dir == Path(defaults.DB_DIR)
    assert config.lock_file == Path(defaults.LOCK_FILE)
    assert config.service_user == defaults.SERVICE_USER
    assert config.sync_databases is True
    assert config.wipe_cache is True
    assert config.empty_values() == []


def test_remote_db_dir():
    config = SyncConfig(
        mount_root="/ipfs",
        store_host="pacman.store",
        distribution="arch",
        architecture="x86_64",
        repository_set="default",
    )
    assert config.remote_db_dir == Path("/ipfs/pkg.pacman.store/arch/x86_64/default/db")


def test_file_values_used():
    file_values = {"cache_dir": "/srv/cache", "wipe_cache": "no", "architecture": "aarch64"}
    with mock.patch("pacman_ipfs_sync.utils.conf._get_file_config", return_value=file_values):
        config = SyncConfig()
    assert config.cache_dir == Path("/srv/cache")
    assert config.wipe_cache is False
    assert config.architecture == "aarch64"


def test_arguments_override_file_values():
    file_values = {"cache_dir": "/srv/cache", "wipe_cache": "no"}
    with mock.patch("pacman_ipfs_sync.utils.conf._get_file_config", return_value=file_values):
        config = SyncConfig(cache_dir="/other", wipe_cache=True)
    assert config.cache_dir == Path("/other")
    assert config.wipe_cache is True


def test_invalid_bool_falls_back(caplog):
    with mock.patch(
        "pacman_ipfs_sync.utils.conf._get_file_config", return_value={"sync_databases": "maybe"}
    ):
        config = SyncConfig()
    assert config.sync_databases is True
    assert any("sync_databases" in r.getMessage() for r in caplog.records)


def test_empty_values():
    config = SyncConfig(cache_dir="", store_host=" ")
    assert config.empty_values() == ["cache_dir", "store_host"]


def test_read_only():
    config = SyncConfig()
    with pytest.raises(AttributeError):
        config._cache_dir = "/tmp"  # noqa: SLF001


def test_equality():
    assert SyncConfig(cache_dir="/a") == SyncConfig(cache_dir="/a")
    assert SyncConfig(cache_dir="/a") != SyncConfig(cache_dir="/b")


def test_from_cli_namespace():
    args = CLIArgumentNamespace(sync_databases=False, wipe_cache=None, config=None)
    config = SyncConfig.from_cli_namespace(args)
    assert config.sync_databases is False
    assert config.wipe_cache is True


@pytest.fixture
def empty_file_config_cache():
    with mock.patch.object(conf, "_file_config_cache", {}):
        yield


def test_config_file_parsing(tmp_path, empty_file_config_cache):
    path = tmp_path / "sync.conf"
    path.write_text("[sync]\ncache_dir = /srv/pkg \nservice_user = ipfs-svc\n")
    values = real_get_file_config(str(path))
    assert values == {"cache_dir": "/srv/pkg", "service_user": "ipfs-svc"}


def test_config_file_missing(tmp_path, empty_file_config_cache):
    assert real_get_file_config(str(tmp_path / "missing.conf")) == {}


def test_config_file_without_section(tmp_path, empty_file_config_cache):
    path = tmp_path / "sync.conf"
    path.write_text("[other]\ncache_dir = /srv/pkg\n")
    assert real_get_file_config(str(path)) == {}


def test_config_file_path_from_env(monkeypatch):
    monkeypatch.setenv("PACMAN_IPFS_SYNC_CONFIG", "/etc/custom.conf")
    assert conf.get_config_file_path() == "/etc/custom.conf"
    monkeypatch.delenv("PACMAN_IPFS_SYNC_CONFIG")
    assert conf.get_config_file_path() == defaults.CONFIG_FILE


def test_repr_lists_settings():
    text = repr(SyncConfig(cache_dir="/srv/pkg", wipe_cache=False))
    assert text.startswith("SyncConfig(cache_dir='/srv/pkg', ")
    assert "wipe_cache=False" in text
