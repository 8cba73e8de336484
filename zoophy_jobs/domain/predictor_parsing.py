"""Tab-separated GLM predictor table parsing."""

from __future__ import annotations

import re
from typing import Final

from .models import Predictor
from .validation_rules import NUMBER_TYPE, PREDICTOR_NAME_RULE, STATE_RULE, STRING_TYPE, validation_check_input

_NUMERIC_CELL_RULE: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class PredictorFileError(ValueError):
    """Raised when predictor table content is structurally invalid.

    Attributes:
        invalid_value: Raw offending cell, header or state value, when one exists.
    """

    def __init__(self, message: str, invalid_value: str | None = None):
        super().__init__(message)
        self.invalid_value = invalid_value


def predictor_parse_table(raw_text: str) -> dict[str, tuple[Predictor, ...]]:
    """Parse predictor table text into predictors grouped by state.

    The first line holds predictor names (the first column header is the
    state column and is ignored). Every following line holds one state name
    and one numeric value per predictor column.

    Args:
        raw_text: Decoded table text.

    Returns:
        dict[str, tuple[Predictor, ...]]: Predictors keyed by state in file order.

    Raises:
        PredictorFileError: Raised on the first structural or value failure.
    """

    # Blank lines are skipped; trailing tabs stay so empty cells are reported.
    table_lines = [table_line for table_line in raw_text.splitlines() if table_line.strip()]
    if not table_lines:
        raise PredictorFileError("Empty Predictor file")

    predictor_names = [name.strip() for name in table_lines[0].split("\t")][1:]
    for predictor_name in predictor_names:
        if not validation_check_input(predictor_name, STRING_TYPE, PREDICTOR_NAME_RULE):
            raise PredictorFileError(f'Invalid Predictor name: "{predictor_name}"', predictor_name)

    predictors: dict[str, tuple[Predictor, ...]] = {}
    for table_line in table_lines[1:]:
        state_cells = table_line.split("\t")
        state = state_cells[0].strip()
        if not validation_check_input(state, STRING_TYPE, STATE_RULE):
            raise PredictorFileError(f'Invalid Predictor state: "{state}"', state)
        if state in predictors:
            raise PredictorFileError(f'Duplicate Predictor state: "{state}"', state)

        value_cells = state_cells[1:]
        state_predictors: list[Predictor] = []
        for column_index, predictor_name in enumerate(predictor_names):
            if column_index >= len(value_cells):
                raise PredictorFileError(f'Missing Predictor value for "{state}": "{predictor_name}"')
            raw_cell = value_cells[column_index]
            value = _predictor_coerce_number(raw_cell)
            if value is None:
                raise PredictorFileError(f'Invalid Predictor value: "{raw_cell}"', raw_cell)
            state_predictors.append(Predictor(group=state, name=predictor_name, value=value))

        # Extra cells are only reported once every header column parsed.
        if len(value_cells) > len(predictor_names):
            unexpected_cell = value_cells[len(predictor_names)]
            raise PredictorFileError(f'Unexpected Predictor value: "{unexpected_cell}"', unexpected_cell)
        predictors[state] = tuple(state_predictors)

    return predictors


def _predictor_coerce_number(raw_cell: str) -> float | None:
    """Coerce one decimal cell to a finite number.

    Args:
        raw_cell: Raw cell text.

    Returns:
        float | None: Parsed value or None when the cell is not a plain decimal.
    """

    normalized_cell = raw_cell.strip()
    if _NUMERIC_CELL_RULE.fullmatch(normalized_cell) is None:
        return None
    value = float(normalized_cell)
    if not validation_check_input(value, NUMBER_TYPE):
        return None
    return value


__all__ = ["PredictorFileError", "predictor_parse_table"]
