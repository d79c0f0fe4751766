"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (storage key, CSV layout, UI text, log settings).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

APP_TITLE = "FieldSurvey Re-Checker"
APP_VERSION = "1.1.0"

# Persistence: one JSON document holding key -> value entries (path resolved in storage module)
APP_DIR_NAME = "FieldSurvey Re-Checker"
STORAGE_FILENAME = "fieldsurvey_storage.json"
STORAGE_KEY = "beneficiary_records"

# Serial numbers are advisory: collection size + 1, left-padded
SERIAL_WIDTH = 3

STATUS_OPTIONS = ["Eligible", "Ineligible"]

DESIGNATION_OPTIONS = ["", "BDO", "Joint BDO", "SDO", "Panchayat Secretary", "Extension Officer"]

# Export
CSV_HEADERS = [
    "Serial Number",
    "Block",
    "GP",
    "Village",
    "Beneficiary ID",
    "Name",
    "Status",
    "Remarks",
    "Latitude",
    "Longitude",
    "Superior Name",
    "Designation",
    "Superior ID",
    "Timestamp",
]
EXPORT_PREFIX = "beneficiary_data_"
CSV_MIME_TYPE = "text/csv"
# Fixed ISO-style date-time: keeps the century and has no comma (rows stay 14 fields)
CSV_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logging
LOG_LEVEL = "INFO"
LOG_MAX_LINES = 1000  # lines kept in the Logs panel (oldest trimmed)

NOTIFY_TIMEOUT_SEC = 5

# Seed record shown on first launch (no saved data yet)
SEED_RECORD = {
    "id": "1",
    "serialNumber": "001",
    "blockName": "BALAGARH",
    "gpName": "Haripur",
    "village": "Gokulnagar",
    "beneficiaryId": "WB-102030",
    "beneficiaryName": "Subhash Mondal",
    "status": "Eligible",
    "remarks": "",
    "superiorName": "Amit Roy",
    "superiorDesignation": "BDO",
    "superiorIdSrh": "SRH-9988",
}
