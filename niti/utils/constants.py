APP_ORG = "Niti"
APP_NAME = "Niti IDE"
APP_DIR = "NitiIDE"

# Editor
DEFAULT_EXTENSION = "rs"
DEFAULT_CONTENT = "// Write your Rust code here\n"
DEFAULT_FONT_SIZE = 14
MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 72
OPEN_FILTER = "Rust (*.rs);;Text (*.txt);;All files (*)"
SAVE_FILTER = "Rust File (*.rs);;All files (*)"

# Serial
DEFAULT_BAUD_RATE = 9600
DEFAULT_READ_TIMEOUT_MS = 1000
DEFAULT_POLL_INTERVAL_MS = 500
READ_CHUNK_SIZE = 1024

# Project commands
DEFAULT_BUILD_COMMAND = "rustc {path} -o {output}"
DEFAULT_RUN_COMMAND = "{output}"

# Notifications
STATUS_MSEC = 3000

# Help menu
SOURCE_URL = "https://github.com/cyberkutti-idec"
ABOUT_TEXT = "Sreeraj Veajesh\ncyberkutti@gmail.com\nGitHub: cyberkutti-idec"
