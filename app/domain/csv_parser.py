# app/domain/csv_parser.py

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Sequence
import re

from app.domain.exceptions import MalformedCSVException
from app.domain.models import ParseResult, TestCase
from app.utils.config import CSVColumnConfig
from app.utils.logger import get_logger

logger = get_logger(__name__)

QUOTE = '"'
DELIMITER = ','
EXPECTED_SEPARATOR = " -> Expected: "

# Export artifacts around each step entry: '1. "Open page"' -> 'Open page'
ORDINAL_PREFIX = re.compile(r'^\d+\.\s*"?')
TRAILING_QUOTE = re.compile(r'"$')

class LogicalRowReader:
    """Merges physical lines into logical CSV rows.

    A row stays open while the accumulated text holds an odd number of
    double quotes, i.e. a quoted field continues on the next physical line.
    The reader is one-pass; ``truncated`` is set once iteration finishes
    with a row still open, in which case that tail is not yielded.
    """

    def __init__(self, lines: Sequence[str]):
        self._lines = lines
        self.rows_read = 0
        self.truncated = False

    def __iter__(self) -> Iterator[str]:
        current = ""
        for line in self._lines:
            current += line
            if current.count(QUOTE) % 2 != 0:
                # Restore the line break consumed by the split
                current += "\n"
                continue

            if current.strip():
                self.rows_read += 1
                yield current
            current = ""

        if current:
            self.truncated = True
            logger.warning(
                f"Document ended inside a quoted field; dropped unterminated row "
                f"starting with {current[:40]!r}"
            )

def split_row(row: str) -> List[str]:
    """Split one logical row into raw field values.

    Commas inside quotes are literal and a doubled quote inside a quoted
    field stands for one quote character. Values are not trimmed.
    """
    fields: List[str] = []
    buffer: List[str] = []
    in_quotes = False
    i = 0
    length = len(row)

    while i < length:
        char = row[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and row[i + 1] == QUOTE:
                buffer.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(buffer))
            buffer = []
        else:
            buffer.append(char)
        i += 1

    fields.append("".join(buffer))
    return fields

def build_field_map(headers: Sequence[str], values: Sequence[str]) -> Dict[str, str]:
    """Zip headers against values; missing values are empty, extras dropped.

    When a header name repeats, the first column with that name wins.
    """
    field_map: Dict[str, str] = {}
    for index, header in enumerate(headers):
        if header in field_map:
            continue
        field_map[header] = values[index] if index < len(values) else ""
    return field_map

def parse_steps(field_value: Optional[str]) -> List[str]:
    """Split a multi-line steps cell into cleaned, non-blank entries."""
    if not field_value or not field_value.strip():
        return []

    steps = []
    for line in field_value.split("\n"):
        step = line.strip()
        if not step:
            continue
        step = TRAILING_QUOTE.sub("", ORDINAL_PREFIX.sub("", step)).strip()
        if step:
            steps.append(step)
    return steps

def pair_steps(actions: Sequence[str], results: Sequence[str]) -> List[str]:
    """Combine actions with the expected result at the same position.

    Pairing follows the actions; results without an action are discarded.
    """
    combined = []
    for index, action in enumerate(actions):
        result = results[index] if index < len(results) else ""
        combined.append(f"{action}{EXPECTED_SEPARATOR}{result}" if result else action)
    return combined

class TestCaseAssembler:
    """Turns a decoded field map into a TestCase, or None for non-data rows."""
    __test__ = False

    def __init__(
        self,
        columns: Optional[CSVColumnConfig] = None,
        empty_steps_placeholder: str = "No steps provided",
        default_url: str = ""
    ):
        self.columns = columns or CSVColumnConfig()
        self.empty_steps_placeholder = empty_steps_placeholder
        self.default_url = default_url

    def assemble(self, field_map: Dict[str, str], row_index: int) -> Optional[TestCase]:
        case_id = self._lookup(field_map, self.columns.id).strip()
        title = self._lookup(field_map, self.columns.title).strip()

        # Suite and section header rows share the columns but leave these blank
        if not case_id or not title:
            logger.debug(f"Row {row_index} skipped: missing id or title")
            return None

        steps = pair_steps(
            parse_steps(self._lookup(field_map, self.columns.actions)),
            parse_steps(self._lookup(field_map, self.columns.results))
        )
        if not steps:
            logger.debug(f"Row {row_index} ({case_id}) has no steps, using placeholder")
            steps = [self.empty_steps_placeholder]

        return TestCase(
            id=case_id,
            title=title,
            steps=steps,
            url=self._lookup(field_map, self.columns.url).strip() or self.default_url,
            description=self._lookup(field_map, self.columns.description),
            preconditions=self._lookup(field_map, self.columns.preconditions),
            postconditions=self._lookup(field_map, self.columns.postconditions)
        )

    @staticmethod
    def _lookup(field_map: Dict[str, str], aliases: Sequence[str]) -> str:
        for alias in aliases:
            value = field_map.get(alias, "")
            if value.strip():
                return value
        return ""

class CSVParser(ABC):
    """Abstract base class for test case CSV parsers."""

    @abstractmethod
    def parse(self, text: str) -> ParseResult:
        """Parse a decoded CSV document into test cases."""
        pass

class TestCaseCSVParser(CSVParser):
    """Parser for AI-generated test case exports.

    Tolerates quoted fields spanning several lines and skips suite/section
    rows. Holds no state between calls.
    """
    __test__ = False

    def __init__(self, assembler: Optional[TestCaseAssembler] = None):
        self.assembler = assembler or TestCaseAssembler()

    def parse(self, text: str) -> ParseResult:
        lines = text.split("\n")
        while lines and not lines[0].strip():
            lines.pop(0)

        if len(lines) < 2 or not any(line.strip() for line in lines[1:]):
            raise MalformedCSVException("CSV must contain a header row and at least one data row")

        headers = [header.strip() for header in split_row(lines[0])]
        reader = LogicalRowReader(lines[1:])

        test_cases = []
        skipped = 0
        for row_index, row in enumerate(reader, start=1):
            field_map = build_field_map(headers, split_row(row))
            test_case = self.assembler.assemble(field_map, row_index)
            if test_case is None:
                skipped += 1
            else:
                test_cases.append(test_case)

        result = ParseResult(
            test_cases=test_cases,
            total_rows=reader.rows_read + (1 if reader.truncated else 0),
            skipped_rows=skipped,
            truncated_rows=1 if reader.truncated else 0
        )
        logger.info(
            f"Parsed {len(test_cases)} test cases from {result.total_rows} rows "
            f"({skipped} skipped, {result.truncated_rows} truncated)"
        )
        return result

class CSVParserFactory:
    """Factory for creating CSV parsers."""

    @staticmethod
    def create_parser(
        parser_type: str = "test_case",
        columns: Optional[CSVColumnConfig] = None,
        empty_steps_placeholder: str = "No steps provided",
        default_url: str = ""
    ) -> CSVParser:
        """Create a CSV parser of the specified type."""
        parsers = {
            "test_case": TestCaseCSVParser
        }

        if parser_type not in parsers:
            raise ValueError(f"Unsupported parser type: {parser_type}")

        assembler = TestCaseAssembler(
            columns=columns,
            empty_steps_placeholder=empty_steps_placeholder,
            default_url=default_url
        )
        return parsers[parser_type](assembler)
