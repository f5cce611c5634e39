import html
import locale
import logging
import sys

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from .api import ping_server
from .config import save_server_settings, server_address
from .controller import (
    NO_DOMAINS,
    NOT_AVAILABLE,
    Link,
    PageController,
    connection_status,
)
from .countries import load_countries
from .rankings import TOP_COUNTRIES

logger = logging.getLogger(__name__)

COUNTRY_PLACEHOLDER = "Select a country"


def link_label(links: list[Link], empty_text: str) -> QLabel:
    if links:
        text = "<br>".join(
            f'<a href="{html.escape(link.href)}">{html.escape(link.text)}</a>'
            for link in links
        )
    else:
        text = html.escape(empty_text)
    label = QLabel(text)
    label.setOpenExternalLinks(True)
    return label


class WorkerSignals(QObject):
    finished = pyqtSignal(int, object)
    failed = pyqtSignal(int, str)


class LookupWorker(QRunnable):
    """Runs one university lookup off the UI thread."""

    def __init__(self, controller: PageController, token: int, country: str):
        super().__init__()
        self.controller = controller
        self.token = token
        self.country = country
        self.signals = WorkerSignals()

    def run(self):
        try:
            universities = self.controller.fetch(self.country)
        except Exception as e:
            # Any failure must reach the UI thread so `loading` is released.
            self.signals.failed.emit(self.token, str(e))
        else:
            self.signals.finished.emit(self.token, universities)


class CountrySignals(QObject):
    loaded = pyqtSignal(object)


class CountryLoader(QRunnable):
    def __init__(self):
        super().__init__()
        self.signals = CountrySignals()

    def run(self):
        self.signals.loaded.emit(load_countries())


class PingSignals(QObject):
    done = pyqtSignal(bool)


class PingWorker(QRunnable):
    def __init__(self):
        super().__init__()
        self.signals = PingSignals()

    def run(self):
        self.signals.done.emit(ping_server())


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit Server Settings")

        current_host, current_port = server_address()

        layout = QVBoxLayout()

        self.host_input = QLineEdit(current_host)
        self.port_input = QLineEdit(str(current_port))

        layout.addWidget(QLabel("Server Host:"))
        layout.addWidget(self.host_input)

        layout.addWidget(QLabel("Server Port:"))
        layout.addWidget(self.port_input)

        self.buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        layout.addWidget(self.buttons)

        self.setLayout(layout)

    def get_settings(self):
        return {
            "host": self.host_input.text().strip(),
            "port": int(self.port_input.text().strip()),
        }


class ClientApp(QWidget):
    def __init__(self, controller: PageController | None = None):
        super().__init__()
        self.controller = controller or PageController()
        self.thread_pool = QThreadPool.globalInstance()
        self.init_ui()

    def init_ui(self):
        self.setWindowTitle("University Finder")
        self.resize(1000, 760)

        layout = QVBoxLayout()

        title = QLabel("<h1>University Finder</h1>")
        layout.addWidget(title)

        # 🔵 Country selector
        search_layout = QHBoxLayout()
        self.country_combo = QComboBox()
        self.country_combo.addItem(COUNTRY_PLACEHOLDER, "")
        self.country_combo.currentIndexChanged.connect(self.on_country_changed)
        self.find_button = QPushButton("Find Universities")
        self.find_button.clicked.connect(self.perform_find)
        search_layout.addWidget(QLabel("Select a Country:"))
        search_layout.addWidget(self.country_combo, 1)
        search_layout.addWidget(self.find_button)

        self.settings_button = QPushButton("Settings")
        self.settings_button.clicked.connect(self.open_settings_dialog)
        search_layout.addWidget(self.settings_button)
        layout.addLayout(search_layout)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: red;")
        layout.addWidget(self.error_label)

        # 🔵 Universities table
        self.universities_table = QTableWidget()
        self.universities_table.setColumnCount(5)
        self.universities_table.setHorizontalHeaderLabels(
            ["Name", "Code", "Country", "State/Province", "Domains"]
        )
        self.universities_table.horizontalHeader().setSectionResizeMode(
            0, QHeaderView.ResizeMode.Stretch
        )
        self.universities_placeholder = QLabel()
        layout.addWidget(self.universities_table, 1)
        layout.addWidget(self.universities_placeholder)

        # 🔵 Top universities per country
        layout.addWidget(QLabel("<h2>Top Universities Per Country</h2>"))
        buttons_layout = QHBoxLayout()
        self.top_buttons = {}
        for country in TOP_COUNTRIES:
            button = QPushButton(country)
            button.setCheckable(True)
            button.clicked.connect(
                lambda _checked, c=country: self.on_top_country_clicked(c)
            )
            buttons_layout.addWidget(button)
            self.top_buttons[country] = button
        layout.addLayout(buttons_layout)

        self.rankings_table = QTableWidget()
        self.rankings_table.setColumnCount(5)
        self.rankings_table.setHorizontalHeaderLabels(
            ["Rank", "Name", "City", "State/Province", "Website"]
        )
        self.rankings_table.horizontalHeader().setSectionResizeMode(
            1, QHeaderView.ResizeMode.Stretch
        )
        self.rankings_placeholder = QLabel()
        layout.addWidget(self.rankings_table, 1)
        layout.addWidget(self.rankings_placeholder)

        self.status_label = QLabel("Status: Unknown")
        layout.addWidget(self.status_label)

        footer = QLabel("© 2024 University Finder. All rights reserved.")
        footer.setStyleSheet("color: gray;")
        layout.addWidget(footer)

        self.setLayout(layout)
        self.refresh()

        self.connection_timer = QTimer(self)
        self.connection_timer.timeout.connect(self.check_connection)
        self.connection_timer.start(5000)  # every 5 seconds for ongoing checks
        # 🔵 Do the first check after a tiny delay (half a second)
        QTimer.singleShot(500, self.check_connection)
        QTimer.singleShot(0, self.load_country_list)

    # --- Actions ---
    def load_country_list(self):
        loader = CountryLoader()
        loader.signals.loaded.connect(self.on_countries_loaded)
        self.thread_pool.start(loader)

    def on_countries_loaded(self, countries):
        self.controller.set_countries(countries)
        self.country_combo.blockSignals(True)
        self.country_combo.clear()
        self.country_combo.addItem(COUNTRY_PLACEHOLDER, "")
        for country in countries:
            self.country_combo.addItem(country, country)
        self.country_combo.blockSignals(False)
        self.controller.select_country("")

    def on_country_changed(self, _index):
        self.controller.select_country(self.country_combo.currentData() or "")

    def perform_find(self):
        token = self.controller.start_find()
        if token is None:
            self.refresh()
            return

        worker = LookupWorker(self.controller, token, self.controller.selected_country)
        worker.signals.finished.connect(self.on_lookup_finished)
        worker.signals.failed.connect(self.on_lookup_failed)
        self.thread_pool.start(worker)
        self.refresh()

    def on_lookup_finished(self, token, universities):
        if self.controller.complete_find(token, universities):
            self.refresh()

    def on_lookup_failed(self, token, reason):
        if self.controller.fail_find(token, reason):
            self.refresh()

    def on_top_country_clicked(self, country):
        self.controller.select_top_country(country)
        self.refresh()

    # --- Rendering ---
    def refresh(self):
        self.error_label.setText(self.controller.error or "")
        self.error_label.setVisible(bool(self.controller.error))
        self.populate_universities()
        self.populate_rankings()
        for country, button in self.top_buttons.items():
            button.setChecked(country == self.controller.selected_top_country)

    def populate_universities(self):
        rows = self.controller.university_rows()
        self.universities_table.setRowCount(0)
        self.universities_table.setVisible(bool(rows))

        for row in rows:
            row_position = self.universities_table.rowCount()
            self.universities_table.insertRow(row_position)
            fields = [row.name, row.code, row.country, row.state_province]
            for column, value in enumerate(fields):
                self.universities_table.setItem(
                    row_position, column, QTableWidgetItem(value)
                )
            self.universities_table.setCellWidget(
                row_position, 4, link_label(row.domains, NO_DOMAINS)
            )
        self.universities_table.resizeRowsToContents()

        placeholder = self.controller.universities_placeholder()
        self.universities_placeholder.setText(placeholder or "")
        self.universities_placeholder.setVisible(placeholder is not None)

    def populate_rankings(self):
        placeholder = self.controller.rankings_placeholder()
        self.rankings_placeholder.setText(placeholder or "")
        self.rankings_placeholder.setVisible(placeholder is not None)

        self.rankings_table.setRowCount(0)
        self.rankings_table.setVisible(placeholder is None)
        if placeholder is not None:
            return

        for row in self.controller.ranking_rows():
            row_position = self.rankings_table.rowCount()
            self.rankings_table.insertRow(row_position)
            fields = [str(row.rank), row.name, row.city, row.state]
            for column, value in enumerate(fields):
                self.rankings_table.setItem(
                    row_position, column, QTableWidgetItem(value)
                )
            website = [row.website] if row.website else []
            self.rankings_table.setCellWidget(
                row_position, 4, link_label(website, NOT_AVAILABLE)
            )

    # --- Server status & settings ---
    def check_connection(self):
        pinger = PingWorker()
        pinger.signals.done.connect(self.on_ping_done)
        self.thread_pool.start(pinger)

    def on_ping_done(self, connected):
        text, color = connection_status(connected)
        self.status_label.setText(text)
        self.status_label.setStyleSheet(f"color: {color};")

    def open_settings_dialog(self):
        dialog = SettingsDialog(self)
        if dialog.exec():
            try:
                new_settings = dialog.get_settings()
            except ValueError:
                QMessageBox.warning(self, "Invalid Port", "Port must be a number.")
                return

            save_server_settings(new_settings["host"], new_settings["port"])

            QMessageBox.information(
                self,
                "Settings Updated",
                "Server settings updated. Please restart the application.",
            )


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Falling back to the default collation: {e}")
    app = QApplication(sys.argv)
    client = ClientApp()
    client.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
