"""Tests for tool entities."""

from converse_client.l1_entities.tool import ConversationTool, ToolChoice


def test_tool_choice_values():
    assert [c.value for c in ToolChoice] == ['none', 'auto', 'required']


def test_tool_optionals_unset():
    tool = ConversationTool(name='get_weather')
    assert tool.description is None
    assert tool.parameters is None
