"""User-facing strings."""

APP_TITLE = " Database Manager "

TAB_TYPES = "Types"
TAB_CONNECTIONS = "Connections"
TAB_DATABASES = "Databases"
TAB_TABLES = "Tables"
TAB_DIVIDER = " | "

CREATE_NEW_CONNECTION = "Create New Connection"
LIST_HIGHLIGHT_SYMBOL = ">> "

QUIT_POPUP_TITLE = "Quit Confirmation"
QUIT_POPUP_PROMPT = "Are you sure you want to quit?"
QUIT_POPUP_FOOTER = "Q or Enter: quit | Esc or C: Cancel"

CONNECTION_POPUP_TITLE = "New DB Connection: {driver}"
CONNECTION_POPUP_FOOTER = (
    "Enter or <Ctrl-m>: confirm | Esc or <Ctrl-c>: Cancel | Tab: Change focused control"
)

LOGS_TITLE = " Logs "

MAIN_FOOTER = "q: quit | Tab/Shift+Tab: switch tab | F12: logs"
LOGS_FOOTER = "j/k: page | q: close | F12: toggle"
