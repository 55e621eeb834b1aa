"""Global configuration constants for the project.

Defines paths, filenames, environment variable names and normalization
defaults used across the pipeline and the CLI.
"""

from __future__ import annotations

import math
from pathlib import Path

# Project directories
PACKAGE_DIR: Path = Path(__file__).resolve().parent
PROJECT_ROOT: Path = PACKAGE_DIR.parent
LOG_DIR: Path = PROJECT_ROOT / "logs"
TEMPLATES_DIR: Path = PACKAGE_DIR / "templates"

# Site generation defaults
DEFAULT_OUTPUT_DIR: Path = PROJECT_ROOT / "output" / "site"
PAGE_TEMPLATE_PATH: Path = TEMPLATES_DIR / "page_template.html"
DEFAULT_LAB_NAME: str = "Yonsei HW Lab"
DEFAULT_LAB_DESCRIPTION: str = (
    "The Yonsei HW Lab investigates second language acquisition and sentence "
    "processing through corpus-based analysis, experimental paradigms, and "
    "computational modeling. Our research focuses on usage-based approaches "
    "to grammar, lexical-semantic development, and cross-linguistic variation."
)

# Content types in navigation order, with their output filename and blurb
CONTENT_TYPES: tuple[str, ...] = (
    "people",
    "publications",
    "projects",
    "news",
    "resources",
)
PAGE_FILENAMES: dict[str, str] = {
    "home": "index.html",
    "people": "people.html",
    "projects": "projects.html",
    "publications": "publications.html",
    "resources": "resources.html",
    "news": "news.html",
}
PAGE_BLURBS: dict[str, str] = {
    "people": "Lab members, students, and collaborators.",
    "projects": "Ongoing and completed research projects.",
    "publications": "Journal articles, preprints, and conference papers.",
    "resources": "Teaching materials, datasets, and code repositories.",
    "news": "Talks, awards, announcements, and lab updates.",
}
# Section cards on the home page, in display order
HOME_SECTIONS: tuple[str, ...] = ("people", "projects", "publications", "resources", "news")

# Feed URL environment variables, one per content type
FEED_URL_ENV_VARS: dict[str, str] = {
    "people": "PEOPLE_SHEET_CSV_URL",
    "projects": "PROJECTS_SHEET_CSV_URL",
    "publications": "PUBLICATIONS_SHEET_CSV_URL",
    "resources": "RESOURCES_SHEET_CSV_URL",
    "news": "NEWS_SHEET_CSV_URL",
}
DEFAULT_MAX_FEED_REQUESTS_PER_SECOND: float = 5.0

# Normalization defaults
ORDER_SENTINEL: float = math.inf
DEFAULT_FILE_LABEL: str = "File"
DEFAULT_PEOPLE_GROUP: str = "People"
HEADER_LINE_DIAGNOSTIC_LIMIT: int = 200
PARSER_DEFAULT_LABEL: str = "(auto-detect)"
SNIFF_DELIMITERS: str = ",\t|;"
SNIFF_SAMPLE_CHARS: int = 4096
MIN_PUBLICATION_YEAR: int = 1900
MAX_PUBLICATION_YEAR: int = 2100
ORCID_URL_PREFIX: str = "https://orcid.org/"
DOI_URL_PREFIX: str = "https://doi.org/"

# Logging
LOG_FILENAME_BUILD_SITE: str = "build_site.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
