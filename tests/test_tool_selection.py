"""
Unit tests for the heuristic tool selection engine.

Covers:
- Gate: agents without tools, inputs without keywords â passthrough
- Calculator extraction (single binary operation only)
- Word counter keyword stripping
- Text formatter keyword detection and stripping
- Fixed precedence: calculator â word counter â formatter
- Tool errors embedded in the response
"""
import pytest

from agent_server.agents import AgentDefinition, ToolSelector, extract_math_expression
from agent_server.tools import calculator_tool, word_count_tool

RAW = "model answer"


@pytest.fixture
def selector():
    return ToolSelector()


@pytest.fixture
def math_agent(registry):
    return registry["math"]


@pytest.fixture
def general_agent(registry):
    return registry["general"]


@pytest.fixture
def programming_agent(registry):
    return registry["programming"]


class TestExtraction:

    def test_first_binary_expression(self):
        assert extract_math_expression("What is 25 * 17?") == "25 * 17"

    def test_decimals(self):
        assert extract_math_expression("add 1.5+2.25 please") == "1.5+2.25"

    def test_multi_operator_only_first_pair(self):
        """Known limitation: only `number operator number` is extracted."""
        assert extract_math_expression("2 + 3 * 4") == "2 + 3"

    def test_no_expression(self):
        assert extract_math_expression("calculate the square root of sixteen") is None
        assert extract_math_expression("sqrt(16)") is None

    def test_non_ascii_digits_ignored(self):
        assert extract_math_expression("calculate ٢ + ٢") is None
        assert extract_math_expression("１２ * 3") is None


class TestGate:

    def test_agent_without_tools_passthrough(self, selector, registry):
        outcome = selector.maybe_apply_tool(registry["router"], "calculate 2 + 2", RAW)
        assert outcome.response == RAW
        assert outcome.tool_name is None

    def test_no_keywords_passthrough(self, selector, math_agent):
        outcome = selector.maybe_apply_tool(math_agent, "Tell me about Euler", RAW)
        assert outcome.response == RAW
        assert outcome.tool_name is None

    def test_should_use_tool(self, selector):
        assert selector.should_use_tool("Please COMPUTE this")
        assert selector.should_use_tool("analyze text here")
        assert not selector.should_use_tool("What is the capital of France?")


class TestCalculator:

    def test_calculator_applied(self, selector, math_agent):
        outcome = selector.maybe_apply_tool(math_agent, "What is 25 * 17?", RAW)
        assert outcome.tool_name == "calculate"
        assert outcome.response == "I'll calculate that for you: 25 * 17 = 425"

    def test_calculator_division_by_zero_embedded(self, selector, math_agent):
        outcome = selector.maybe_apply_tool(math_agent, "calculate 5 / 0", RAW)
        assert outcome.tool_name == "calculate"
        assert outcome.error == "Invalid mathematical expression"
        assert "5 / 0" in outcome.response
        assert "Invalid mathematical expression" in outcome.response

    def test_calculator_keyword_without_expression_passthrough(self, selector, math_agent):
        outcome = selector.maybe_apply_tool(math_agent, "calculate the area of a circle", RAW)
        assert outcome.response == RAW
        assert outcome.tool_name is None

    def test_non_ascii_digits_passthrough(self, selector, math_agent):
        """Arabic-Indic digits are not an expression the calculator can take."""
        outcome = selector.maybe_apply_tool(math_agent, "calculate ٢ + ٢", RAW)
        assert outcome.response == RAW
        assert outcome.tool_name is None
        assert outcome.error is None

    def test_math_keyword_alone_does_not_trigger_calculator(self, selector, math_agent):
        """'math' opens the gate but is not a calculator trigger."""
        outcome = selector.maybe_apply_tool(math_agent, "math 2 3", RAW)
        assert outcome.response == RAW

    def test_agent_without_calculator(self, selector, general_agent):
        """General agent has no calculator; '+' opens the gate but nothing applies."""
        outcome = selector.maybe_apply_tool(general_agent, "What is 2 + 2?", RAW)
        assert outcome.response == RAW


class TestWordCounter:

    def test_word_count_applied(self, selector, general_agent):
        outcome = selector.maybe_apply_tool(general_agent, "count words the quick brown fox", RAW)
        assert outcome.tool_name == "count_words"
        assert outcome.response == "Text analysis: 4 words, 19 characters, 1 lines"

    def test_only_keyword_passthrough(self, selector, general_agent):
        outcome = selector.maybe_apply_tool(general_agent, "Count words", RAW)
        assert outcome.response == RAW

    def test_analyze_stripped(self, selector, programming_agent):
        outcome = selector.maybe_apply_tool(programming_agent, "Analyze text def foo(): pass", RAW)
        assert outcome.tool_name == "count_words"
        assert outcome.response.startswith("Text analysis: 4 words")


class TestFormatter:

    def test_uppercase(self, selector, general_agent):
        outcome = selector.maybe_apply_tool(general_agent, "uppercase hello there", RAW)
        assert outcome.tool_name == "format_text"
        assert outcome.response == "Formatted text (uppercase): HELLO THERE"

    def test_reverse_case_insensitive_keyword(self, selector, programming_agent):
        outcome = selector.maybe_apply_tool(programming_agent, "REVERSE stressed", RAW)
        assert outcome.response == "Formatted text (reverse): desserts"

    def test_first_listed_format_wins(self, selector, general_agent):
        """uppercase is checked before title even if title appears first."""
        outcome = selector.maybe_apply_tool(general_agent, "title uppercase abc", RAW)
        assert outcome.response == "Formatted text (uppercase): TITLE  ABC"

    def test_format_keyword_only_passthrough(self, selector, general_agent):
        outcome = selector.maybe_apply_tool(general_agent, "lowercase", RAW)
        assert outcome.response == RAW

    def test_math_agent_cannot_format(self, selector, math_agent):
        outcome = selector.maybe_apply_tool(math_agent, "uppercase hello", RAW)
        assert outcome.response == RAW


class TestPrecedence:

    def test_word_count_before_formatter(self, selector, general_agent):
        """Both keywords present: word counter runs first and wins."""
        outcome = selector.maybe_apply_tool(general_agent, "count words in reverse order", RAW)
        assert outcome.tool_name == "count_words"

    def test_calculator_falls_through_to_word_count(self, selector):
        """No extractable expression: the next eligible tool is tried."""
        agent = AgentDefinition(
            name="combo",
            instructions="x",
            model="m",
            temperature=0.5,
            tools=(calculator_tool, word_count_tool),
        )
        outcome = selector.maybe_apply_tool(agent, "calculate and count words one two", RAW)
        assert outcome.tool_name == "count_words"

    def test_calculator_before_word_count(self, selector):
        agent = AgentDefinition(
            name="combo",
            instructions="x",
            model="m",
            temperature=0.5,
            tools=(word_count_tool, calculator_tool),
        )
        outcome = selector.maybe_apply_tool(agent, "count words and calculate 3 + 4", RAW)
        assert outcome.tool_name == "calculate"
        assert outcome.response.endswith("3 + 4 = 7")
