"""Probe harness for ``group.getUserGroupsV2``.

A :class:`Scenario` describes one request variant (extra or missing
parameters, a forced signature) and the :class:`Expectation` its response
must meet.  :class:`ApiProbe` builds a fresh parameter set per scenario,
signs it, sends exactly one ``GET`` and checks the outcome.  There is no
retry: a single failed call fails the scenario.

Usage::

    from okgroups import OkConfig
    from okgroups.probe import SCENARIOS, ApiProbe

    with ApiProbe(OkConfig.from_env()) as probe:
        for outcome in probe.run_all():
            print(outcome.scenario.name, "ok" if outcome.passed else outcome.failure)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from okgroups.client import OkClient
from okgroups.config import OkConfig
from okgroups.errors import OkDecodeError, OkHttpError, ProbeAssertionError
from okgroups.models import GroupsResult
from okgroups.observability import get_logger

log = get_logger("okgroups.probe")


@dataclass(frozen=True)
class Expectation:
    """What a scenario's response must look like.

    When ``error_code`` is ``None`` the call must succeed (no application
    error).  ``message_prefix`` applies to ``error_msg``.
    """

    status_code: int = 200
    error_code: int | None = None
    message_prefix: str | None = None
    non_empty: bool = False
    max_groups: int | None = None


@dataclass(frozen=True)
class Scenario:
    """One probe request variant.

    Attributes
    ----------
    name:
        Short identifier, usable as a pytest id.
    description:
        Human-readable summary.
    overrides:
        Parameters added to (or replacing) the base set.
    drop:
        Base parameters removed before signing.
    sig:
        Signature sent verbatim instead of the computed one.
    expect:
        The expected outcome.
    """

    name: str
    description: str
    expect: Expectation
    overrides: dict[str, str] = field(default_factory=dict)
    drop: frozenset[str] = frozenset()
    sig: str | None = None


@dataclass
class ProbeOutcome:
    """Result of running one scenario through :meth:`ApiProbe.run_all`."""

    scenario: Scenario
    result: GroupsResult | None = None
    failure: ProbeAssertionError | None = None

    @property
    def passed(self) -> bool:
        return self.failure is None


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        name="all_user_groups",
        description="Required parameters only",
        expect=Expectation(non_empty=True),
    ),
    Scenario(
        name="invalid_uid",
        description="Non-numeric user id",
        overrides={"uid": "invalid_uid"},
        expect=Expectation(error_code=110, message_prefix="PARAM_USER_ID"),
    ),
    Scenario(
        name="missing_required",
        description="uid parameter omitted",
        drop=frozenset({"uid"}),
        expect=Expectation(error_code=100, message_prefix="PARAM"),
    ),
    Scenario(
        name="incorrect_sig",
        description="Signature that does not match the parameters",
        sig="incorrect_sig",
        expect=Expectation(error_code=104, message_prefix="PARAM_SIGNATURE"),
    ),
    Scenario(
        name="wrong_anchor",
        description="Paging anchor the gateway never issued",
        overrides={"anchor": "some_anchor_value"},
        expect=Expectation(
            error_code=100,
            message_prefix="PARAM : Invalid paging anchor",
        ),
    ),
    Scenario(
        name="right_direction",
        description="Valid paging direction",
        overrides={"direction": "AROUND"},
        expect=Expectation(non_empty=True),
    ),
    Scenario(
        name="wrong_direction",
        description="Unknown paging direction",
        overrides={"direction": "wrong"},
        expect=Expectation(
            error_code=100,
            message_prefix="PARAM : Invalid parameter direction value",
        ),
    ),
    Scenario(
        name="incorrect_count",
        description="count below the accepted range",
        overrides={"count": "-1"},
        expect=Expectation(
            error_code=100,
            message_prefix="PARAM : Parameter 'count' should be in range : [1..100].",
        ),
    ),
    Scenario(
        name="correct_count",
        description="count inside the accepted range",
        overrides={"count": "5"},
        expect=Expectation(max_groups=5),
    ),
)


def verify(expect: Expectation, result: GroupsResult) -> list[str]:
    """Return the list of ways *result* misses *expect* (empty on a match)."""
    problems: list[str] = []

    if result.status_code != expect.status_code:
        problems.append(
            f"status_code: expected {expect.status_code}, got {result.status_code}"
        )

    error = result.error
    if expect.error_code is None:
        if error is not None:
            problems.append(
                f"unexpected API error {error.error_code}: {error.error_msg}"
            )
    elif error is None:
        problems.append(f"error_code: expected {expect.error_code}, got no error")
    else:
        if error.error_code != expect.error_code:
            problems.append(
                f"error_code: expected {expect.error_code}, got {error.error_code}"
            )
        if expect.message_prefix is not None and not error.error_msg.startswith(
            expect.message_prefix
        ):
            problems.append(
                f"error_msg: expected prefix {expect.message_prefix!r}, "
                f"got {error.error_msg!r}"
            )

    if expect.non_empty and not result.groups:
        problems.append("groups: expected a non-empty list")
    if expect.max_groups is not None and len(result.groups) > expect.max_groups:
        problems.append(
            f"groups: expected at most {expect.max_groups}, got {len(result.groups)}"
        )
    return problems


class ApiProbe:
    """Runs :class:`Scenario` objects against the gateway.

    Parameters
    ----------
    config:
        Credentials and endpoint.  Each probe owns its own client, so
        probes with different configs do not interfere.
    """

    def __init__(self, config: OkConfig) -> None:
        self._config = config
        self._client = OkClient(config)

    @property
    def config(self) -> OkConfig:
        return self._config

    def base_params(self) -> dict[str, str]:
        """Return a fresh required-parameter set."""
        return self._client.groups.base_params()

    def build_params(self, scenario: Scenario) -> dict[str, str]:
        params = self.base_params()
        for key in scenario.drop:
            params.pop(key, None)
        params.update(scenario.overrides)
        return params

    def run(self, scenario: Scenario) -> GroupsResult:
        """Send *scenario*'s request and check it.

        Raises
        ------
        ProbeAssertionError
            If the response does not meet ``scenario.expect`` or cannot be
            decoded (malformed body, unknown group role).
        OkNetworkError
            On transport failures; these are not retried.
        """
        params = self.build_params(scenario)
        try:
            result = self._client.groups.fetch(params, sig=scenario.sig)
        except OkHttpError as exc:
            if exc.status_code != scenario.expect.status_code:
                raise ProbeAssertionError(
                    f"{scenario.name}: status_code: expected "
                    f"{scenario.expect.status_code}, got {exc.status_code}",
                    context={
                        "scenario": scenario.name,
                        "expected": scenario.expect.status_code,
                        "actual": exc.status_code,
                    },
                    cause=exc,
                ) from exc
            result = GroupsResult(status_code=exc.status_code or 0)
        except OkDecodeError as exc:
            raise ProbeAssertionError(
                f"{scenario.name}: undecodable response: {exc.message}",
                context={
                    "scenario": scenario.name,
                    "expected": scenario.expect,
                    "actual": exc.context,
                },
                cause=exc,
            ) from exc

        problems = verify(scenario.expect, result)
        if problems:
            log.warning(
                "Scenario failed",
                extra={"extra_fields": {"scenario": scenario.name, "problems": problems}},
            )
            raise ProbeAssertionError(
                f"{scenario.name}: " + "; ".join(problems),
                context={
                    "scenario": scenario.name,
                    "expected": scenario.expect,
                    "actual": _summary(result),
                },
            )
        log.info(
            "Scenario passed",
            extra={"extra_fields": {"scenario": scenario.name, "groups": len(result.groups)}},
        )
        return result

    def run_all(self, scenarios: tuple[Scenario, ...] | list[Scenario] = SCENARIOS) -> list[ProbeOutcome]:
        """Run *scenarios* in order, collecting failures instead of stopping.

        Network errors still propagate.
        """
        outcomes: list[ProbeOutcome] = []
        for scenario in scenarios:
            try:
                outcomes.append(ProbeOutcome(scenario, result=self.run(scenario)))
            except ProbeAssertionError as exc:
                outcomes.append(ProbeOutcome(scenario, failure=exc))
        return outcomes

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ApiProbe:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _summary(result: GroupsResult) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "status_code": result.status_code,
        "groups": len(result.groups),
    }
    if result.error is not None:
        summary["error_code"] = result.error.error_code
        summary["error_msg"] = result.error.error_msg
    return summary
