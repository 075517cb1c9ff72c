APP_NAME = "Tandem Practice API"
APP_VERSION = "1.0.0"
