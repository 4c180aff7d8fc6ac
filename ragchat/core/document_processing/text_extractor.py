"""
Plain-text extraction from stored uploads using LangChain loaders.

PDFs go through PyPDFLoader; everything else is read as UTF-8 text.

Dependencies: langchain_community.document_loaders
System role: Extraction stage of document ingestion
"""

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader

from ragchat.core.exceptions import ExtractionError

PDF_CONTENT_TYPE = "application/pdf"


class TextExtractor:
    """Extract text from a stored file."""

    def extract(self, file_path: str, content_type: str | None = None) -> str:
        """
        Extract the full text of a file.

        Args:
            file_path: Path to the stored file
            content_type: Declared MIME type, used alongside the suffix to detect PDFs

        Returns:
            str: Extracted text (may be blank)

        Raises:
            ExtractionError: When the file is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.is_file():
            raise ExtractionError(f"File not found: {file_path}", file_path)

        is_pdf = path.suffix.lower() == ".pdf" or content_type == PDF_CONTENT_TYPE
        try:
            if is_pdf:
                loader = PyPDFLoader(file_path)
            else:
                loader = TextLoader(file_path, encoding="utf-8")
            documents = loader.load()
        except Exception as e:
            kind = "PDF" if is_pdf else "text file"
            raise ExtractionError(f"Failed to extract {kind}: {e}", file_path) from e

        return "\n".join(doc.page_content for doc in documents)
