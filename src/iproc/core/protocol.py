PROTOCOL_VERSION = "1.0"

ERROR_CODES = {
    "ERROR": 1,
    "INVALID_INPUT": 2,
    "OPEN_FAILED": 3,
    "SAVE_FAILED": 4,
}
