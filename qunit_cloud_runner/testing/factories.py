"""Test factories for generating test data."""

from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from qunit_cloud_runner.models.config import TestTarget
from qunit_cloud_runner.models.result import PlatformResult


class PlatformResultFactory(DataclassFactory[PlatformResult]):
    """Factory for PlatformResult."""

    __model__ = PlatformResult

    counters = None
    job_url = None
    message = None


class TargetFactory(ModelFactory[TestTarget]):
    """Factory for TestTarget."""

    name = None
    platforms = None
