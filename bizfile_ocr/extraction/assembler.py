"""Assembly of a company record from a recognition result.

Runs field extraction over the document text, then classifies every
recognized table and feeds it through the matching row mappers.
"""

from pathlib import Path

from bizfile_ocr.ocr.models import RecognitionResult
from bizfile_ocr.utils.config import ExtractionConfig
from bizfile_ocr.utils.logger import get_logger

from .field_extractor import FieldExtractor, load_field_patterns
from .records import CompanyRecord
from .row_mappers import ROW_MAPPERS
from .table_classifier import Grid, TableCategory, TableClassifier

logger = get_logger(__name__)

_SECTION_FIELDS: dict[TableCategory, str] = {
    TableCategory.OFFICERS: "officers",
    TableCategory.SHAREHOLDERS: "shareholders",
    TableCategory.CHARGES: "charges",
    TableCategory.ISSUED_CAPITAL: "issued_share_capital",
    TableCategory.PAID_UP_CAPITAL: "paid_up_capital",
}

# Fixed order so a table matching several categories appends predictably.
_CATEGORY_ORDER = tuple(_SECTION_FIELDS)


class DocumentAssembler:
    """Builds a ``CompanyRecord`` from OCR text and tables.

    The assembler holds no per-document state and can be shared across
    requests.

    Args:
        field_extractor: Extractor for the scalar company fields.
        classifier: Table classifier for the record sections.
    """

    def __init__(
        self,
        field_extractor: FieldExtractor | None = None,
        classifier: TableClassifier | None = None,
    ) -> None:
        self.field_extractor = field_extractor or FieldExtractor()
        self.classifier = classifier or TableClassifier()

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "DocumentAssembler":
        """Create an assembler using any configured field pattern overrides."""
        if config.patterns_path:
            return cls(FieldExtractor(load_field_patterns(Path(config.patterns_path))))
        return cls()

    def assemble(self, result: RecognitionResult) -> CompanyRecord:
        """Extract a company record from a recognition result.

        Args:
            result: Recognized text and tables of one document.

        Returns:
            Populated company record. Missing fields and tables leave
            their defaults in place.
        """
        record = CompanyRecord(**self.field_extractor.extract_all(result.content))

        for index, table in enumerate(result.tables):
            grid = Grid.from_table(table)
            categories = self.classifier.classify(grid)
            if not categories:
                logger.debug("Table %d not recognized", index)
                continue

            for category in _CATEGORY_ORDER:
                if category not in categories:
                    continue
                entries = ROW_MAPPERS[category](grid)
                getattr(record, _SECTION_FIELDS[category]).extend(entries)
                logger.debug(
                    "Table %d classified as %s: %d rows", index, category, len(entries)
                )

        logger.info(
            "Assembled record for '%s': %d officers, %d shareholders, %d charges",
            record.company_name,
            len(record.officers),
            len(record.shareholders),
            len(record.charges),
        )
        return record
