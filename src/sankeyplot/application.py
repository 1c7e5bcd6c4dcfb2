from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import os
import sys
from typing import Optional, Sequence

ORG_ID = "sankeyplot"
APP_ID = "sankey-plot"
ORG_DOMAIN = "sankeyplot.local"

VISIBLE_APP_NAME = "Sankey Plot"


def create_app(argv: Optional[Sequence[str]] = None) -> QApplication:
    """Create and configure the QApplication instance (or return the running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    # Settings (last directory) go to a plain INI file instead of the registry
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance()
    if app is None:
        app = QApplication(list(argv) if argv is not None else sys.argv)

    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app
