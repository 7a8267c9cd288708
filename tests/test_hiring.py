"""Tests for hiring, the name pool and the swarm container."""

import pytest

from aether_swarm.exceptions import ConfigurationError, NamePoolExhaustedError
from aether_swarm.hiring import NamePool
from aether_swarm.prompts import NAMES, PERSONA_INSTRUCTIONS, TOOLS_REFERENCE, get_persona_instructions
from aether_swarm.swarm import Swarm
from aether_swarm.tools.hiring import HireTool
from aether_swarm.types import Role

from conftest import call_response, text_response


class TestNamePool:
    def test_names_are_unique_until_exhausted(self):
        pool = NamePool(["Ada", "Bao", "Chen"], seed=3)
        drawn = [pool.next_name() for _ in range(3)]
        assert sorted(drawn) == ["Ada", "Bao", "Chen"]
        assert pool.remaining == 0
        with pytest.raises(NamePoolExhaustedError, match="All 3 names"):
            pool.next_name()

    def test_same_seed_same_order(self):
        first = NamePool(seed=42)
        second = NamePool(seed=42)
        assert [first.next_name() for _ in range(10)] == [second.next_name() for _ in range(10)]

    def test_unshuffled_keeps_order(self):
        pool = NamePool(shuffle=False)
        assert pool.next_name() == NAMES[0]
        assert pool.next_name() == NAMES[1]

    def test_duplicates_are_dropped(self):
        pool = NamePool(["Ada", "Ada", "Bao"], shuffle=False)
        assert pool.remaining == 2


class TestPrompts:
    def test_persona_lookup_is_case_insensitive(self):
        assert get_persona_instructions("Black") == PERSONA_INSTRUCTIONS["black"]

    def test_unknown_persona(self):
        with pytest.raises(ConfigurationError, match="Unknown persona: purple"):
            get_persona_instructions("purple")


class TestHiringService:
    @pytest.mark.asyncio
    async def test_hire_registers_and_wires(self, swarm):
        agent = await swarm.hiring.hire("Coder", "green")

        assert agent.name == NAMES[0]
        assert agent.role is Role.CODER
        assert swarm.directory.get_agent(agent.name) is agent
        assert swarm.router.agents[agent.name] is agent
        assert list(agent.tools) == ["message", "completeWorkItem", "assignWorkItem", "getWorkItemDetail"]
        assert swarm.policy.is_wired(agent.name)

    @pytest.mark.asyncio
    async def test_instructions_are_composed(self, swarm):
        agent = await swarm.hiring.hire(Role.TESTER, "black")
        text = agent.system_instructions
        assert text.startswith(f"You are {agent.name}.\nYou are a Tester.")
        assert PERSONA_INSTRUCTIONS["black"] in text
        assert TOOLS_REFERENCE.strip() in text

    @pytest.mark.asyncio
    async def test_bad_role_does_not_consume_a_name(self, swarm):
        before = swarm.hiring.name_pool.remaining
        with pytest.raises(ConfigurationError):
            await swarm.hiring.hire("Janitor", "blue")
        with pytest.raises(ConfigurationError):
            await swarm.hiring.hire("Coder", "purple")
        assert swarm.hiring.name_pool.remaining == before
        assert len(swarm.directory) == 0

    @pytest.mark.asyncio
    async def test_pool_exhaustion(self, client, settings):
        swarm = Swarm(client, settings=settings, name_pool=NamePool(["Ada"], shuffle=False))
        await swarm.hiring.hire("Coder", "white")
        with pytest.raises(NamePoolExhaustedError):
            await swarm.hiring.hire("Coder", "white")
        assert swarm.directory.names() == ["Ada"]


class TestHireTool:
    @pytest.mark.asyncio
    async def test_success_text(self, swarm):
        tool = HireTool(swarm.hiring)
        result = await tool.execute(role="Project Manager", persona="blue")
        assert result == f"You have successfully hired {NAMES[0]} as a new Project Manager."

    @pytest.mark.asyncio
    async def test_errors_become_text(self, client, settings):
        swarm = Swarm(client, settings=settings, name_pool=NamePool(["Ada"], shuffle=False))
        tool = HireTool(swarm.hiring)

        assert (await tool.execute(role="Janitor", persona="blue")) == "Error: Unknown role: Janitor"
        assert (await tool.execute(role="Coder", persona="blue")).startswith("You have successfully hired Ada")
        assert (await tool.execute(role="Coder", persona="blue")) == "Error: All 1 names have been used."

    def test_declaration_enums(self, swarm):
        params = HireTool(swarm.hiring).parameters
        assert params["properties"]["role"]["enum"] == ["Ceo", "Project Manager", "Coder", "Tester"]
        assert params["properties"]["persona"]["enum"] == ["blue", "white", "red", "black", "yellow", "green"]


class TestSwarm:
    @pytest.mark.asyncio
    async def test_start_hires_one_ceo(self, swarm):
        ceo = await swarm.start()
        assert ceo.role is Role.CEO
        assert PERSONA_INSTRUCTIONS["blue"] in ceo.system_instructions
        assert list(ceo.tools) == ["message", "broadcast", "hire"]
        assert await swarm.start() is ceo
        assert swarm.roster() == [{"name": ceo.name, "role": "Ceo"}]

    @pytest.mark.asyncio
    async def test_ceo_hires_through_its_tool(self, client, swarm):
        ceo_name, pm_name = NAMES[0], NAMES[1]
        client.script(
            ceo_name,
            call_response("hire", {"role": "Project Manager", "persona": "white"}),
            call_response("message", {"name": pm_name, "text": "Please plan a login page."}),
            text_response("The plan is ready."),
        )
        client.script(pm_name, text_response("I will plan it."))

        reply = await swarm.post_message("Build me a login page.")

        assert reply == "The plan is ready."
        assert swarm.roster() == [
            {"name": ceo_name, "role": "Ceo"},
            {"name": pm_name, "role": "Project Manager"},
        ]
        ceo_tool_results = [t.text for t in swarm.ceo.history if t.role.value == "tool"]
        assert ceo_tool_results == [
            f"You have successfully hired {pm_name} as a new Project Manager.",
            "I will plan it.",
        ]
        # the CEO's next call already lists the new hire
        assert client.calls_for(ceo_name)[1].system_instruction.endswith(
            f"{ceo_name}: Ceo\n{pm_name}: Project Manager"
        )

    def test_history_of_unknown_agent(self, swarm):
        with pytest.raises(ConfigurationError):
            swarm.history("Nobody")

