"""Tests for okgroups/probe.py against a simulated gateway."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from okgroups.config import OkConfig
from okgroups.errors import ErrorCode, OkDecodeError, OkNetworkError, ProbeAssertionError
from okgroups.models import GroupsResult
from okgroups.probe import (
    SCENARIOS,
    ApiProbe,
    Expectation,
    Scenario,
    verify,
)
from okgroups.signing import sign

SECRET = "test-secret-5678"
UID = "573382458991123"


def _group(i: int) -> dict:
    return {
        "block_reason": None,
        "groupId": str(50000 + i),
        "role": "MEMBER" if i else "ADMIN",
        "status": "ACTIVE",
        "unblock_date_ms": None,
        "userId": UID,
    }


def _response(status: int, body: dict) -> httpx.Response:
    resp = httpx.Response(status, content=json.dumps(body).encode())
    resp.request = httpx.Request("GET", "https://api.ok.ru/fb.do")
    return resp


class FakeGateway:
    """Answers like ``fb.do`` does for ``group.getUserGroupsV2``."""

    def __init__(self, total_groups: int = 12) -> None:
        self.total_groups = total_groups
        self.calls: list[dict[str, str]] = []

    def _error(self, code: int, msg: str) -> httpx.Response:
        return _response(200, {"error_code": code, "error_msg": msg, "error_data": None})

    def __call__(self, method: str, url: str, params: dict[str, str], **_: object) -> httpx.Response:
        self.calls.append(dict(params))
        unsigned = {k: v for k, v in params.items() if k != "sig"}
        if params.get("sig") != sign(unsigned, SECRET):
            return self._error(104, "PARAM_SIGNATURE : Invalid signature incorrect_sig")
        if "uid" not in params:
            return self._error(100, "PARAM : Missing required parameter uid")
        if not params["uid"].isdigit():
            return self._error(110, "PARAM_USER_ID : Invalid user id")
        if "anchor" in params and params["anchor"] != "LTE0":
            return self._error(100, "PARAM : Invalid paging anchor some_anchor_value")
        if "direction" in params and params["direction"] not in ("AROUND", "FORWARD", "BACKWARD"):
            return self._error(100, "PARAM : Invalid parameter direction value wrong")
        count = int(params.get("count", "10"))
        if not 1 <= count <= 100:
            return self._error(100, "PARAM : Parameter 'count' should be in range : [1..100]. Actual value is -1")
        groups = [_group(i) for i in range(min(count, self.total_groups))]
        return _response(200, {"groups": groups, "anchor": "LTE0"})


@pytest.fixture
def probe_config() -> OkConfig:
    return OkConfig(application_key="CTESTAPPKEY", secret_key=SECRET, uid=UID)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def probe(probe_config, gateway):
    p = ApiProbe(probe_config)
    with patch.object(p._client._transport._client, "request", side_effect=gateway):
        yield p
    p.close()


def _scenario(name: str) -> Scenario:
    return next(s for s in SCENARIOS if s.name == name)


class TestBuildParams:
    def test_base_params(self, probe):
        assert probe.base_params() == {
            "application_key": "CTESTAPPKEY",
            "method": "group.getUserGroupsV2",
            "uid": UID,
        }

    def test_drop_and_override(self, probe):
        assert "uid" not in probe.build_params(_scenario("missing_required"))
        assert probe.build_params(_scenario("incorrect_count"))["count"] == "-1"

    def test_fresh_set_per_scenario(self, probe):
        probe.build_params(_scenario("invalid_uid"))
        assert probe.base_params()["uid"] == UID


class TestBuiltinScenarios:
    @pytest.mark.parametrize("scenario", SCENARIOS, ids=[s.name for s in SCENARIOS])
    def test_scenario_passes(self, probe, scenario):
        result = probe.run(scenario)
        assert result.status_code == 200

    def test_incorrect_count_reports_range(self, probe):
        result = probe.run(_scenario("incorrect_count"))
        assert result.error is not None
        assert result.error.error_code == 100
        assert result.error.error_msg.startswith(
            "PARAM : Parameter 'count' should be in range : [1..100]."
        )

    def test_incorrect_sig_sent_verbatim(self, probe, gateway):
        result = probe.run(_scenario("incorrect_sig"))
        assert gateway.calls[-1]["sig"] == "incorrect_sig"
        assert result.error is not None and result.error.error_code == 104

    def test_correct_count_bounded(self, probe):
        result = probe.run(_scenario("correct_count"))
        assert 0 < len(result.groups) <= 5

    def test_one_request_per_scenario(self, probe, gateway):
        for scenario in SCENARIOS:
            probe.run(scenario)
        assert len(gateway.calls) == len(SCENARIOS)

    def test_run_all(self, probe):
        outcomes = probe.run_all()
        assert [o.scenario.name for o in outcomes] == [s.name for s in SCENARIOS]
        assert all(o.passed for o in outcomes)


class TestFailures:
    def test_mismatch_raises_probe_assertion(self, probe):
        scenario = Scenario(
            name="expects_error",
            description="",
            expect=Expectation(error_code=110, message_prefix="PARAM_USER_ID"),
        )
        with pytest.raises(ProbeAssertionError) as exc_info:
            probe.run(scenario)
        assert exc_info.value.code == ErrorCode.PROBE_FAILED
        assert exc_info.value.context["scenario"] == "expects_error"
        assert isinstance(exc_info.value, AssertionError)

    def test_empty_groups_fail_non_empty(self, probe_config):
        gateway = FakeGateway(total_groups=0)
        probe = ApiProbe(probe_config)
        with (
            patch.object(probe._client._transport._client, "request", side_effect=gateway),
            pytest.raises(ProbeAssertionError, match="non-empty"),
        ):
            probe.run(_scenario("all_user_groups"))
        probe.close()

    def test_http_status_mismatch(self, probe_config):
        probe = ApiProbe(probe_config)
        with (
            patch.object(
                probe._client._transport._client, "request",
                return_value=_response(503, {"error": "unavailable"}),
            ),
            pytest.raises(ProbeAssertionError) as exc_info,
        ):
            probe.run(_scenario("all_user_groups"))
        assert exc_info.value.context["actual"] == 503
        probe.close()

    def test_network_error_propagates(self, probe_config):
        probe = ApiProbe(probe_config)
        with (
            patch.object(
                probe._client._transport._client, "request",
                side_effect=httpx.ConnectError("down"),
            ),
            pytest.raises(OkNetworkError),
        ):
            probe.run(_scenario("all_user_groups"))
        probe.close()

    def test_run_all_collects_failures(self, probe):
        bad = Scenario(name="bad", description="", expect=Expectation(max_groups=0))
        outcomes = probe.run_all([bad, _scenario("invalid_uid")])
        assert [o.passed for o in outcomes] == [False, True]
        assert outcomes[0].failure is not None
        assert outcomes[1].result is not None

    def test_undecodable_response_fails_scenario(self, probe_config):
        owner = {"groups": [{"groupId": "1", "userId": "2", "role": "OWNER", "status": "ACTIVE"}]}
        probe = ApiProbe(probe_config)
        with (
            patch.object(
                probe._client._transport._client, "request",
                side_effect=lambda *a, **kw: _response(200, owner),
            ),
            pytest.raises(ProbeAssertionError, match="undecodable") as exc_info,
        ):
            probe.run(_scenario("all_user_groups"))
        assert isinstance(exc_info.value.__cause__, OkDecodeError)
        assert exc_info.value.context["actual"] == {"field": "role", "value": "OWNER"}
        probe.close()

    def test_run_all_survives_undecodable_response(self, probe_config):
        owner = {"groups": [{"groupId": "1", "userId": "2", "role": "OWNER", "status": "ACTIVE"}]}
        probe = ApiProbe(probe_config)
        with patch.object(
            probe._client._transport._client, "request",
            side_effect=lambda *a, **kw: _response(200, owner),
        ):
            outcomes = probe.run_all(SCENARIOS)
        probe.close()
        assert len(outcomes) == len(SCENARIOS)
        assert not any(o.passed for o in outcomes)
        assert all(isinstance(o.failure.__cause__, OkDecodeError) for o in outcomes)


class TestVerify:
    def test_success_match(self):
        assert verify(Expectation(), GroupsResult(status_code=200)) == []

    def test_unexpected_error(self):
        result = GroupsResult.from_json(200, {"error_code": 100, "error_msg": "PARAM : x"})
        problems = verify(Expectation(), result)
        assert problems == ["unexpected API error 100: PARAM : x"]

    def test_missing_error(self):
        problems = verify(Expectation(error_code=104), GroupsResult(status_code=200))
        assert problems == ["error_code: expected 104, got no error"]

    def test_wrong_code_and_prefix(self):
        result = GroupsResult.from_json(200, {"error_code": 100, "error_msg": "PARAM : x"})
        problems = verify(Expectation(error_code=104, message_prefix="PARAM_SIGNATURE"), result)
        assert len(problems) == 2

    def test_max_groups(self):
        result = GroupsResult.from_json(200, {"groups": [_group(i) for i in range(6)]})
        assert verify(Expectation(max_groups=5), result) == [
            "groups: expected at most 5, got 6"
        ]

    def test_status_code(self):
        assert verify(Expectation(), GroupsResult(status_code=201)) == [
            "status_code: expected 200, got 201"
        ]
