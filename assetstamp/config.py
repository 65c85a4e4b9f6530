SRC_DIR = "src"
DIST_DIR = "dist"

LOG_PATH = "build.log"
REPORT_PATH = "stamp-report.json"

# local references with these suffixes get a ?t= marker
JS_EXT = (".js",)
CSS_EXT = (".css",)
HTML_EXT = (".html",)
ASSET_EXT_FOR_CSS_URL = (
    ".png",".jpg",".jpeg",".gif",".svg",".webp",".ico",
    ".woff",".woff2",".ttf",".eot",
    ".mp4",".mp3",
)

# freshness marker key, matched case-sensitively
STAMP_KEY = "t"

HTMLMIN_OPTS = {
    "remove_comments": True,
    "remove_empty_space": True,
    "remove_optional_attribute_quotes": False,
    "reduce_boolean_attributes": False,
}

# inline <script type=...> values that hold JavaScript
JS_SCRIPT_TYPES = {"", "text/javascript", "application/javascript", "module"}
