"""
Numeric cell validation for turning markdown table columns into chart values.
"""

import re
from typing import Any, List, Optional, Tuple, Union

Number = Union[int, float]

NUMBER_IN_TEXT = re.compile(r"(-?\d+(?:\.\d+)?)")


class ChartDataValidator:
    """Utility class for validating and normalizing chart data."""

    @staticmethod
    def _clean_numeric_string(clean_str: str) -> Tuple[str, bool]:
        """Remove formatting characters from numeric string."""
        has_percentages = "%" in clean_str
        numeric_str = (
            clean_str.replace("%", "")
            .replace(",", "")
            .replace("$", "")
            .replace("€", "")
            .replace("£", "")
            .strip()
        )
        return numeric_str, has_percentages

    @staticmethod
    def _try_direct_conversion(numeric_str: str) -> Optional[float]:
        """Try direct conversion to float."""
        try:
            value = float(numeric_str)
        except ValueError:
            return None
        # float() accepts "nan" and "inf", which are not table numbers
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return value

    @staticmethod
    def _extract_number_from_text(numeric_str: str) -> Optional[float]:
        """Extract first number from text like 'High (85)' or 'Score: 92'."""
        number_match = NUMBER_IN_TEXT.search(numeric_str)
        if number_match:
            return float(number_match.group(1))
        return None

    @staticmethod
    def to_plain_number(value: float) -> Number:
        """Return whole floats as ints so 10.0 serializes as 10."""
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @staticmethod
    def parse_number(value: Any) -> Optional[Number]:
        """
        Strictly parse a table cell as a number.

        Currency symbols, thousands separators and percent signs are ignored;
        anything else in the cell makes it non-numeric.
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        if not isinstance(value, str) or not value.strip():
            return None

        numeric_str, _ = ChartDataValidator._clean_numeric_string(value.strip())
        result = ChartDataValidator._try_direct_conversion(numeric_str)
        if result is None:
            return None
        return ChartDataValidator.to_plain_number(result)

    @staticmethod
    def is_numeric_column(values: List[Any]) -> bool:
        """Check that every value in a column parses as a number."""
        return bool(values) and all(
            ChartDataValidator.parse_number(value) is not None for value in values
        )

    @staticmethod
    def has_numeric_value(values: List[Any]) -> bool:
        """Check that at least one value in a column parses as a number."""
        return any(ChartDataValidator.parse_number(value) is not None for value in values)

    @staticmethod
    def validate_numeric_data(values: List[Any]) -> Tuple[List[Number], bool]:
        """
        Validate and convert string values to numeric data.

        Args:
            values: List of string values to validate

        Returns:
            Tuple of (cleaned_values, has_percentages)
        """
        cleaned_values = []
        has_percentages = False

        for value_str in values:
            clean_str = "" if value_str is None else str(value_str).strip()
            numeric_str, has_pct = ChartDataValidator._clean_numeric_string(clean_str)
            has_percentages = has_percentages or has_pct

            value = ChartDataValidator._try_direct_conversion(numeric_str)
            if value is None:
                value = ChartDataValidator._extract_number_from_text(numeric_str)
            if value is None:
                # Cells like "N/A" or "-" plot as zero
                value = 0.0

            cleaned_values.append(ChartDataValidator.to_plain_number(value))

        return cleaned_values, has_percentages
