"""CSV loader with parsing, field-count recovery and row validation."""

import io
import logging
import pandas as pd
from typing import Optional, Any
from config.settings import CatalogConfig
from retrieval.errors import EmptyDatasetError
from schemas.device import DeviceRow, LoadResult, ParseIssue

logger = logging.getLogger(__name__)

TOO_MANY_FIELDS = "TooManyFields"
TOO_FEW_FIELDS = "TooFewFields"
MISSING_QUOTES = "MissingQuotes"


class CSVLoader:
    """Parse device CSV text into validated rows."""

    def __init__(
        self,
        catalog_config: Optional[CatalogConfig] = None,
        lenient_threshold: int = 10,
        verbose: bool = False
    ):
        """
        Initialize CSV loader.

        Args:
            catalog_config: Static catalog config (required column list)
            lenient_threshold: TooManyFields count above which the text is re-parsed leniently
            verbose: Log every parse issue individually
        """
        self.catalog_config = catalog_config or CatalogConfig.load()
        self.lenient_threshold = lenient_threshold
        self.verbose = verbose

    def parse(self, text: str, source: Optional[str] = None) -> LoadResult:
        """
        Parse CSV text.

        Args:
            text: Raw CSV text with a header row
            source: Location the text came from (for diagnostics)

        Returns:
            LoadResult with the valid rows and any non-fatal issues

        Raises:
            EmptyDatasetError: If no data rows were parsed
        """
        header, df, issues = self._read_frame(text)
        lenient = False

        too_many = [issue for issue in issues if issue.code == TOO_MANY_FIELDS]
        if len(too_many) > self.lenient_threshold:
            logger.warning("Detected many field mismatch errors, re-parsing with lenient field count")
            header, df, issues = self._read_frame(text)
            lenient = True

        rows, short_issues = self._to_rows(header, df)
        issues.extend(short_issues)

        if issues:
            self._report_issues(issues)

        if not rows:
            raise EmptyDatasetError()

        missing_columns = [col for col in self.catalog_config.required_columns if col not in header]
        if missing_columns:
            logger.warning(f"CSV is missing columns: {missing_columns}")

        valid_rows = [row for row in rows if row.is_valid()]
        logger.info(f"CSV data loaded: {len(rows)} rows total, {len(valid_rows)} valid")

        return LoadResult(
            rows=valid_rows,
            issues=issues,
            total_rows=len(rows),
            missing_columns=missing_columns,
            lenient=lenient,
            source=source,
        )

    def _read_frame(self, text: str) -> tuple[list[str], pd.DataFrame, list[ParseIssue]]:
        """
        Tokenize CSV text.

        The header is read as an ordinary line so its width fixes the expected
        field count. Longer lines go through the bad-line handler, which keeps
        the first fields and drops the extras.

        Args:
            text: Raw CSV text

        Returns:
            (trimmed header names, data frame of raw cells, issues)
        """
        issues: list[ParseIssue] = []
        expected = self._header_width(text)

        def on_bad_line(fields: list[str]) -> list[str]:
            issues.append(ParseIssue(
                code=TOO_MANY_FIELDS,
                message=f"Too many fields: expected {expected} fields but parsed {len(fields)}",
            ))
            return fields[:expected]

        try:
            df = pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=object,
                na_filter=False,
                skip_blank_lines=True,
                delimiter=",",
                quotechar='"',
                doublequote=True,
                engine="python",
                on_bad_lines=on_bad_line,
            )
        except pd.errors.EmptyDataError:
            raise EmptyDatasetError("CSV file is empty")

        unclosed_row = self._find_unclosed_quote(text)
        if unclosed_row is not None:
            issues.append(ParseIssue(
                type="Quotes",
                code=MISSING_QUOTES,
                message="Quoted field unterminated; following rows may be lost",
                row=unclosed_row,
            ))

        header = [self._clean_cell(value) or "" for value in df.iloc[0].tolist()]
        data = df.iloc[1:].reset_index(drop=True)
        return header, data, issues

    def _find_unclosed_quote(self, text: str) -> Optional[int]:
        """
        Find a quoted field that is never closed.

        Only a quote at the start of a field opens one; a doubled quote inside
        it is an escape.

        Returns:
            Zero-based data row index where the open field starts, or None
        """
        in_quote = False
        field_start = True
        line_has_content = False
        record = 0
        open_record = 0
        i = 0

        while i < len(text):
            char = text[i]
            if in_quote:
                if char == '"':
                    if text[i + 1:i + 2] == '"':
                        i += 1
                    else:
                        in_quote = False
            elif char == '"' and field_start:
                in_quote = True
                open_record = record
                line_has_content = True
            elif char == "\n":
                if line_has_content:
                    record += 1
                line_has_content = False
                field_start = True
                i += 1
                continue
            elif char != "\r":
                line_has_content = True

            field_start = char == "," and not in_quote
            i += 1

        if in_quote:
            # Record 0 is the header
            return max(open_record - 1, 0)
        return None

    def _header_width(self, text: str) -> int:
        """Get the number of header fields."""
        try:
            header = pd.read_csv(
                io.StringIO(text),
                header=None,
                nrows=1,
                dtype=object,
                na_filter=False,
                skip_blank_lines=True,
                delimiter=",",
                quotechar='"',
                doublequote=True,
                engine="python",
            )
        except pd.errors.EmptyDataError:
            raise EmptyDatasetError("CSV file is empty")

        return len(header.columns)

    def _to_rows(self, header: list[str], df: pd.DataFrame) -> tuple[list[DeviceRow], list[ParseIssue]]:
        """
        Convert raw cells to rows.

        Trailing cells missing from short lines stay absent (None).

        Args:
            header: Trimmed header names
            df: Data frame of raw cells (no header row)

        Returns:
            (rows, TooFewFields issues)
        """
        rows = []
        issues = []

        for index, values in enumerate(df.itertuples(index=False, name=None)):
            cells = [self._clean_cell(value) for value in values]
            present = len(cells)
            while present and cells[present - 1] is None:
                present -= 1

            if present < len(header):
                issues.append(ParseIssue(
                    code=TOO_FEW_FIELDS,
                    message=f"Too few fields: expected {len(header)} fields but parsed {present}",
                    row=index,
                ))

            record = dict(zip(header, cells))
            rows.append(DeviceRow.model_validate(record))

        return rows, issues

    def _clean_cell(self, value: Any) -> Optional[str]:
        """Trim a cell; padding for missing fields becomes None."""
        if value is None or (isinstance(value, float) and pd.isna(value)):
            return None
        return str(value).strip()

    def _report_issues(self, issues: list[ParseIssue]) -> None:
        """Log parse issues."""
        logger.error(f"CSV parse errors: {len(issues)}")
        if self.verbose:
            for issue in issues:
                logger.error(
                    f"CSV error - type: {issue.type}, code: {issue.code}, "
                    f"message: {issue.message}, row: {issue.row}"
                )
