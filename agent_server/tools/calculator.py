"""
Calculator tool.

Evaluates arithmetic expressions by walking the parsed AST and only
applying whitelisted operators and functions; eval() is never used.
"""
import ast
import logging
import math
import operator
from typing import Any, Union

from pydantic import BaseModel

from .base import ToolDescriptor, ToolError

logger = logging.getLogger(__name__)


class CalculationResult(BaseModel):
    """Successful calculation."""
    expression: str
    result: Union[int, float]


_MAX_EXPONENT = 1000


def _safe_pow(base: Any, exponent: Any) -> Any:
    if abs(exponent) > _MAX_EXPONENT:
        raise ValueError("Exponent too large")
    return operator.pow(base, exponent)


_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: _safe_pow,
    ast.Mod: operator.mod,
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
}

_SAFE_NAMES = {
    "abs": abs,
    "round": round,
    "min": min,
    "max": max,
    "pow": _safe_pow,
    "sqrt": math.sqrt,
    "log": math.log,
    "exp": math.exp,
    "pi": math.pi,
    "e": math.e,
}


def _eval_node(node: ast.AST) -> Any:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError(f"Unsupported constant: {node.value!r}")
        return node.value

    if isinstance(node, ast.BinOp) and type(node.op) in _OPERATORS:
        return _OPERATORS[type(node.op)](_eval_node(node.left), _eval_node(node.right))

    if isinstance(node, ast.UnaryOp) and type(node.op) in _OPERATORS:
        return _OPERATORS[type(node.op)](_eval_node(node.operand))

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in _SAFE_NAMES:
            raise ValueError("Only whitelisted functions are allowed")
        func = _SAFE_NAMES[node.func.id]
        if not callable(func):
            raise ValueError(f"{node.func.id} is not a function")
        return func(*[_eval_node(arg) for arg in node.args])

    if isinstance(node, ast.Name) and node.id in _SAFE_NAMES:
        value = _SAFE_NAMES[node.id]
        if callable(value):
            raise ValueError(f"{node.id} must be called")
        return value

    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def _normalize(value: Any) -> Union[int, float]:
    """Render integral floats as ints (10 / 2 -> 5)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def calculate(expression: str) -> Union[CalculationResult, ToolError]:
    """Evaluate a mathematical expression."""
    try:
        tree = ast.parse(expression.strip(), mode="eval")
        value = _eval_node(tree)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError("Expression did not produce a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("Result is not finite")
    except (SyntaxError, ValueError, TypeError, ZeroDivisionError, OverflowError) as exc:
        logger.debug(f"Calculator rejected {expression!r}: {exc}")
        return ToolError(error="Invalid mathematical expression", original_input=expression)

    return CalculationResult(expression=expression, result=_normalize(value))


calculator_tool = ToolDescriptor(
    name="calculate",
    description="Perform mathematical calculations. Input should be a valid mathematical expression.",
    parameters={
        "type": "object",
        "properties": {
            "expression": {
                "type": "string",
                "description": "Mathematical expression to evaluate (e.g., '2 + 2', '10 * 5', 'sqrt(16)')",
            },
        },
        "required": ["expression"],
    },
    function=calculate,
)
