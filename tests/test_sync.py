"""
Tests for the background sync hook.
"""

import logging

from conftest import run


def test_form_data_tag_triggers_flush(gateway, caplog):
    async def scenario():
        return await gateway.sync("background-sync-form-data")

    with caplog.at_level(logging.INFO):
        handled = run(gateway, scenario)

    assert handled is True
    assert gateway.background_sync.flush_count == 1
    assert "Background sync triggered" in caplog.text
    assert "Syncing cached form data" in caplog.text


def test_other_tags_are_ignored(gateway):
    async def scenario():
        return await gateway.sync("periodic-refresh")

    assert run(gateway, scenario) is False
    assert gateway.background_sync.flush_count == 0
