"""Tests for the HTTP-backed chat context and its registry"""

import asyncio

import pytest

from delegatify.api.interactions import InteractionRegistry, WebInteraction
from delegatify.models.card import ActionEvent, CodeForm, Reply

from tests.conftest import VALID_CODE


async def _reply_and_finish(ctx):
    await ctx.reply("done")


async def _wait_forever(ctx):
    await ctx.send(Reply(text="prompt", buttons=[]))
    await asyncio.sleep(3600)


@pytest.mark.asyncio
async def test_one_answer_per_open_form():
    interaction = WebInteraction("owner", form_timeout=5)
    event = ActionEvent(action_id="open_modal:x", user_id="owner")

    pending = asyncio.create_task(interaction.open_form(event, CodeForm()))
    await asyncio.sleep(0)

    assert interaction.submit_form(VALID_CODE) is True
    assert interaction.submit_form("B" * 70) is False
    assert await pending == VALID_CODE
    assert interaction.open_form_spec is None


@pytest.mark.asyncio
async def test_reopened_form_waits_for_new_answer():
    interaction = WebInteraction("owner", form_timeout=0.05)
    event = ActionEvent(action_id="open_modal:x", user_id="owner")

    first = asyncio.create_task(interaction.open_form(event, CodeForm()))
    await asyncio.sleep(0)
    interaction.submit_form(VALID_CODE)
    assert await first == VALID_CODE

    # Nothing submitted this time, so the form expires as dismissed
    assert await interaction.open_form(event, CodeForm()) is None


@pytest.mark.asyncio
async def test_trigger_refuses_other_users():
    interaction = WebInteraction("owner")
    interaction.outbox.append(Reply(text="prompt"))
    interaction.task = asyncio.create_task(asyncio.sleep(3600))
    try:
        assert interaction.trigger("open_modal:x", "intruder") is False
    finally:
        interaction.task.cancel()


@pytest.mark.asyncio
async def test_registry_stays_within_cap():
    registry = InteractionRegistry(max_interactions=3)

    for _ in range(10):
        interaction = registry.create("owner")
        await interaction.start(_reply_and_finish)
        assert len(registry) <= 3


@pytest.mark.asyncio
async def test_cancel_running_unwinds_waiting_tasks():
    registry = InteractionRegistry()
    interaction = registry.create("owner")
    interaction.task = asyncio.create_task(_wait_forever(interaction))
    await asyncio.sleep(0)

    assert await registry.cancel_running() == 1
    assert interaction.task.cancelled()
    assert not interaction.running
