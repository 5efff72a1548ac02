"""Tests for run configuration models."""

import pytest
from pydantic import ValidationError

from qunit_cloud_runner.models.config import ResultSelectors, RunConfig
from qunit_cloud_runner.models.platform import PlatformDefaults


class TestRunConfig:
    """Tests for RunConfig."""

    def test_parses_camel_case_options(self) -> None:
        """Accepts the camelCase option names of the configuration file."""
        config = RunConfig.model_validate(
            {
                "urls": [
                    {"url": "http://localhost:9000/test.html"},
                    {
                        "url": "http://localhost:9000/other.html",
                        "name": "other",
                        "platforms": [{"browserName": "firefox"}],
                    },
                ],
                "platforms": [{"browserName": "chrome"}],
                "zeroAssertionsPass": False,
                "runInParallel": False,
                "pollInterval": 5,
                "retryLimit": 3,
                "retryScope": "run",
            }
        )

        assert len(config.urls) == 2
        assert config.urls[0].platforms is None
        assert config.urls[1].name == "other"
        assert config.urls[1].platforms == [{"browserName": "firefox"}]
        assert config.platforms == [{"browserName": "chrome"}]
        assert config.zero_assertions_pass is False
        assert config.run_in_parallel is False
        assert config.poll_interval == 5
        assert config.retry_limit == 3
        assert config.retry_scope == "run"

    def test_defaults(self) -> None:
        """Unset options take their documented defaults."""
        config = RunConfig(urls=[])

        assert config.platforms == []
        assert config.zero_assertions_pass is True
        assert config.run_in_parallel is True
        assert config.poll_interval == 10.0
        assert config.retry_limit == 10
        assert config.retry_scope == "platform"
        assert config.selectors == ResultSelectors()

    @pytest.mark.parametrize(
        ("run_in_series", "expected_parallel"), [(True, False), (False, True)]
    )
    def test_accepts_run_in_series(
        self, run_in_series: bool, expected_parallel: bool
    ) -> None:
        """Translates the legacy runInSeries flag."""
        config = RunConfig.model_validate(
            {"urls": [], "runInSeries": run_in_series}
        )

        assert config.run_in_parallel is expected_parallel

    def test_run_in_parallel_wins_over_run_in_series(self) -> None:
        """An explicit runInParallel is not overridden."""
        config = RunConfig.model_validate(
            {"urls": [], "runInSeries": True, "runInParallel": True}
        )

        assert config.run_in_parallel is True

    def test_rejects_non_positive_poll_interval(self) -> None:
        """Poll interval must be positive."""
        with pytest.raises(ValidationError):
            RunConfig.model_validate({"urls": [], "pollInterval": 0})

    def test_requires_urls(self) -> None:
        """The list of test pages is mandatory."""
        with pytest.raises(ValidationError):
            RunConfig.model_validate({"platforms": []})

    def test_is_frozen(self) -> None:
        """Configuration cannot change during a run."""
        config = RunConfig(urls=[])

        with pytest.raises(ValidationError):
            config.run_in_parallel = False  # type: ignore[misc]


class TestPlatformDefaults:
    """Tests for PlatformDefaults."""

    def test_from_env_reads_travis_variables(self) -> None:
        """Uses the Travis job id and number for build and tunnel."""
        defaults = PlatformDefaults.from_env(
            {"TRAVIS_JOB_ID": "123", "TRAVIS_JOB_NUMBER": "45.1"}
        )

        assert defaults.build == "123"
        assert defaults.tunnel_identifier == "45.1"

    def test_from_env_prefers_explicit_variables(self) -> None:
        """Explicit Sauce variables take precedence over Travis ones."""
        defaults = PlatformDefaults.from_env(
            {
                "SAUCE_BUILD": "build-9",
                "SAUCE_TUNNEL_IDENTIFIER": "tunnel-9",
                "TRAVIS_JOB_ID": "123",
                "TRAVIS_JOB_NUMBER": "45.1",
            }
        )

        assert defaults.build == "build-9"
        assert defaults.tunnel_identifier == "tunnel-9"

    def test_from_env_without_ci(self) -> None:
        """Leaves build and tunnel unset outside CI."""
        defaults = PlatformDefaults.from_env({})

        assert defaults.capabilities() == {
            "maxDuration": 1800,
            "commandTimeout": 300,
            "idleTimeout": 300,
        }
