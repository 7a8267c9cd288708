"""Tests for role-based tool grants."""

import pytest

from aether_swarm.capabilities import CapabilityPolicy
from aether_swarm.exceptions import ConfigurationError
from aether_swarm.types import Role


@pytest.fixture
def policy(router, work_queue):
    return CapabilityPolicy(router, work_queue)


@pytest.mark.parametrize("role, expected", [
    (Role.PROJECT_MANAGER, ["message", "createWorkItem", "assignWorkItem", "getWorkItemDetail", "completeWorkItem"]),
    (Role.CODER, ["message", "completeWorkItem", "assignWorkItem", "getWorkItemDetail"]),
    (Role.TESTER, ["message", "completeWorkItem", "assignWorkItem", "getWorkItemDetail"]),
])
def test_tools_per_role(policy, make_agent, role, expected):
    agent = make_agent("Bao", role=role)
    assert policy.grant(agent) is True
    assert list(agent.tools) == expected


def test_ceo_tools(policy, swarm, make_agent):
    policy.attach_hiring(swarm.hiring)
    ceo = make_agent("Ada", role="Ceo")
    policy.grant(ceo)
    assert list(ceo.tools) == ["message", "broadcast", "hire"]


def test_ceo_needs_hiring_service(policy, make_agent):
    ceo = make_agent("Ada", role="Ceo")
    with pytest.raises(ConfigurationError):
        policy.grant(ceo)
    assert ceo.tools == {}
    assert not policy.is_wired("Ada")


def test_grant_twice_is_a_noop(policy, make_agent):
    agent = make_agent("Bao", role="Coder")
    policy.grant(agent)
    tools_before = dict(agent.tools)

    assert policy.grant(agent) is False
    assert agent.tools == tools_before
    assert policy.is_wired("Bao")


def test_unknown_role_is_fatal(policy):
    with pytest.raises(ConfigurationError, match="Unknown role"):
        policy.tools_for("Janitor", "Bao")


def test_speaking_tools_are_bound_to_owner(policy, make_agent, router):
    pm = make_agent("Bao", role="Project Manager")
    policy.grant(pm)
    assert pm.tools["message"]._owner == "Bao"
    assert pm.tools["assignWorkItem"]._owner == "Bao"
    assert "fromName" not in pm.tools["message"].parameters["properties"]


def test_declarations_use_model_schema_types(policy, make_agent):
    pm = make_agent("Bao", role="Project Manager")
    policy.grant(pm)
    declaration = pm.tools["assignWorkItem"].declaration
    assert declaration["name"] == "assignWorkItem"
    assert declaration["parameters"]["type"] == "OBJECT"
    assert declaration["parameters"]["properties"]["id"]["type"] == "NUMBER"
    assert declaration["parameters"]["required"] == ["id", "assignee"]
