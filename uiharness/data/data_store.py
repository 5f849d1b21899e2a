"""
Tabular test data store
Loads every sheet of a spreadsheet into memory and serves row lookups
"""
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from uiharness.errors import DataLoadError, DataNotLoadedError
from uiharness.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATA_FILE = 'test_data.xlsx'

Row = Mapping[str, Any]
Sheet = Tuple[Row, ...]


def _cell_value(value: Any) -> Any:
    """Unwrap numpy/pandas scalars so rows only hold plain Python values"""
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, 'item') and not isinstance(value, (str, bytes)):
        try:
            return value.item()
        except (TypeError, ValueError):
            return value
    return value


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> Sheet:
    """Turn a raw header-less frame into row records keyed by the first row.

    Fully empty rows are skipped. Empty cells are left out of the row
    record entirely, so a missing column reads as missing rather than as
    a default. Header cells that are empty drop their whole column.
    """
    if df.shape[0] == 0:
        return ()

    columns: List[Optional[str]] = []
    for cell in df.iloc[0].tolist():
        if pd.isna(cell) or str(cell).strip() == '':
            columns.append(None)
        else:
            columns.append(str(cell).strip())

    rows = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        record: Dict[str, Any] = {}
        for column, value in zip(columns, raw.tolist()):
            if column is None or pd.isna(value):
                continue
            record[column] = _cell_value(value)
        if record:
            rows.append(MappingProxyType(record))

    logger.debug(f"Sheet '{sheet_name}' columns: {[c for c in columns if c]}")
    return tuple(rows)


class DataStore:
    """In-memory cache of sheet name -> rows, filled by an explicit load()"""

    def __init__(self, default_path: Union[str, Path, None] = None, lazy_load: bool = False):
        self.default_path = Path(default_path or DEFAULT_DATA_FILE)
        self.lazy_load = lazy_load
        self.source: Optional[Path] = None
        self._cache: Optional[Dict[str, Sheet]] = None

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    @property
    def sheet_names(self) -> List[str]:
        self._ensure_loaded()
        return list(self._cache.keys())

    def has_sheet(self, name: str) -> bool:
        self._ensure_loaded()
        return name in self._cache

    def load(self, path: Union[str, Path, None] = None) -> None:
        """Read every sheet of the workbook at path and replace the cache.

        The new cache is built completely before it is installed. On any
        failure the cache is cleared, leaving the store unloaded, and a
        DataLoadError is raised.
        """
        file_path = Path(path) if path is not None else self.default_path
        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path

        logger.info(f"Attempting to load data from: {file_path}")

        try:
            cache = self._read_workbook(file_path)
        except DataLoadError as e:
            self.clear()
            logger.error(f"Failed to load Excel data from {file_path}: {e.reason}")
            raise
        except Exception as e:
            self.clear()
            logger.error(f"Failed to load Excel data from {file_path}: {e}")
            raise DataLoadError(file_path, str(e) or type(e).__name__) from e

        self._cache = cache
        self.source = file_path
        logger.info(f"All data sheets loaded successfully ({len(cache)} sheets).")

    def _read_workbook(self, file_path: Path) -> Dict[str, Sheet]:
        if not file_path.exists():
            raise DataLoadError(file_path, 'file does not exist')
        if not file_path.is_file():
            raise DataLoadError(file_path, 'path is not a file')

        cache: Dict[str, Sheet] = {}
        with pd.ExcelFile(file_path) as xls:
            for name in xls.sheet_names:
                sheet_name = str(name)
                if not sheet_name.strip():
                    continue
                # dtype=object keeps ints, floats and booleans as the cell typed them
                df = xls.parse(name, header=None, dtype=object)
                rows = normalize_sheet(df, sheet_name)
                cache[sheet_name] = rows
                logger.info(f"Successfully loaded {len(rows)} rows from sheet: {sheet_name}")
        return cache

    def clear(self) -> None:
        """Drop the cache; the store reports not loaded afterwards"""
        self._cache = None
        self.source = None

    def _ensure_loaded(self) -> None:
        if self._cache is not None:
            return
        if self.lazy_load:
            logger.warning('Data cache is empty. Attempting to load data now.')
            self.load()
            return
        raise DataNotLoadedError('Test data has not been loaded; call DataStore.load() before looking up rows')

    def get_sheet(self, name: str) -> Sheet:
        """All rows of a sheet in source order; empty with a warning if the sheet is absent"""
        self._ensure_loaded()
        rows = self._cache.get(name)
        if rows is None:
            logger.warning(f"Sheet '{name}' not found in {self.source}")
            return ()
        return rows

    def get_row(self, name: str, key: str, value: Any) -> Optional[Row]:
        """First row whose key column matches value (trimmed, case-sensitive)"""
        wanted = str(value).strip()
        for row in self.get_sheet(name):
            if key in row and str(row[key]).strip() == wanted:
                return row
        return None
