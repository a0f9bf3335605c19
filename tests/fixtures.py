import logging
from unittest import mock

import pytest

from tests.t_utils import FakeHost, make_sync_tree


@pytest.fixture
def tmp_lock_file(tmp_path):
    return tmp_path / "sync.lck"


@pytest.fixture(autouse=True)
def patch_get_file_config():
    with mock.patch(
        "pacman_ipfs_sync.utils.conf._get_file_config",
        return_value={},
    ):
        yield


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("pacman_ipfs_sync")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def sync_config(tmp_path):
    return make_sync_tree(tmp_path)
