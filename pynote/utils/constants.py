APP_ORG = "QuickTools"
APP_NAME = "PyNotepad"

FILE_FILTER = "Text Documents (*.txt);;All Files (*)"

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_RECENTS = "file/recent"
SETTINGS_WORD_WRAP = "format/word_wrap"
SETTINGS_FIND_MATCH_CASE = "find/match_case"
SETTINGS_FIND_SEARCH_DOWN = "find/search_down"
MAX_RECENTS = 8

STATUS_MSEC = 3000
