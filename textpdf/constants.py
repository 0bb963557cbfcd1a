from reportlab.lib.pagesizes import A4

EOF_MARKER = b"%%EOF"

DEFAULT_OUTPUT_PATH = "manual.pdf"

# A4 in whole points: [0 0 595 842].
MEDIA_BOX = (0.0, 0.0, float(round(A4[0])), float(round(A4[1])))

FONT_RESOURCE_NAME = "F1"
FONT_SUBTYPE = "Type1"
FONT_BASE_NAME = "Helvetica"
FONT_SIZE = 24
TEXT_ORIGIN = (100, 700)

# Generation number of the free-list head in the xref table.
FREE_ENTRY_GENERATION = 65535
