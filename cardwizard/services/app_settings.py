from PySide6.QtCore import QObject, Signal, Property

from cardwizard.config import DEFAULT_PRINT_DPI


class AppSettings(QObject):
    """Export-time settings shared by the CLI and the export manager."""
    print_dpi_changed = Signal(int)
    metadata_changed = Signal()

    def __init__(self, print_dpi=DEFAULT_PRINT_DPI, author="", title=""):
        super().__init__()
        if int(print_dpi) <= 0:
            raise ValueError(f"print_dpi must be positive, got {print_dpi}")
        self._print_dpi = int(print_dpi)
        self._author = author
        self._title = title

    @Property(int)
    def print_dpi(self):
        return self._print_dpi

    @print_dpi.setter
    def print_dpi(self, new_dpi):
        new_dpi = int(new_dpi)
        if new_dpi <= 0:
            raise ValueError(f"print_dpi must be positive, got {new_dpi}")
        if new_dpi != self._print_dpi:
            self._print_dpi = new_dpi
            self.print_dpi_changed.emit(new_dpi)

    @Property(str)
    def author(self):
        return self._author

    @author.setter
    def author(self, value):
        if value != self._author:
            self._author = value
            self.metadata_changed.emit()

    @Property(str)
    def title(self):
        return self._title

    @title.setter
    def title(self, value):
        if value != self._title:
            self._title = value
            self.metadata_changed.emit()
