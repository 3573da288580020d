import logging

import pytest

from typemodels import AdapterRegistry, LazyClassResolver, ModelingConfig


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def registry():
    """Registry with the default adapter associations."""
    return AdapterRegistry()


@pytest.fixture
def private_registry():
    """Registry whose object views expose _private members."""
    return AdapterRegistry(config=ModelingConfig(expose_private=True))


@pytest.fixture
def classes(registry):
    """Class resolver backed by the default registry."""
    return LazyClassResolver(registry)


@pytest.fixture
def restore_package_logger():
    """Undo logger changes made by the CLI's logging setup."""
    package_logger = logging.getLogger("typemodels")
    saved = (list(package_logger.handlers), package_logger.propagate, package_logger.level)
    yield package_logger
    package_logger.handlers[:] = saved[0]
    package_logger.propagate = saved[1]
    package_logger.setLevel(saved[2])
