import pytest

from vptreex import config as vx_config


@pytest.fixture(autouse=True)
def reset_runtime_context():
    vx_config.reset_runtime_context()
    yield
    vx_config.reset_runtime_context()
