from tests.fixtures import patch_get_file_config, reset_package_logger  # noqa: F401
