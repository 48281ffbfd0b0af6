# Page assembly for PDF files: extract, split and concatenate.
from .codec import DocumentCodec, PypdfCodec
from .config import EditorConfig, load_config
from .configs import ConcatenationMode, ConcatenationRequest, ExtractionRequest, SplitRequest
from .engine import PageAssemblyEngine
from .errors import ErrorKind
from .page_spec import PageGrammar, parse_page_spec, select_valid_pages
from .results import BatchResult, ExtractionResult
from .validation import validate_file
