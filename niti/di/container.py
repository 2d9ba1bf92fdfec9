from __future__ import annotations

from pathlib import Path

from niti.domain.interfaces import IBuildService, IFileService, IGateway, ISerialPortService
from niti.services.build_service import BuildService
from niti.services.config.app_config import AppConfig, build_app_config
from niti.services.file_service import FileService
from niti.services.gateway import LocalGateway
from niti.services.serial_port_service import SerialPortService
from niti.services.session.document_manager import DocumentSessionManager
from niti.services.session.serial_manager import SerialSessionManager
from niti.services.ui.adapters import QtFileDialogService, QtLinkOpener, QtMessageService
from niti.services.ui.main_window import MainWindow
from niti.services.ui.ports.dialogs import IFileDialogService
from niti.services.ui.ports.links import ILinkOpener
from niti.services.ui.ports.messages import IMessageService
from niti.services.ui.presenters.main_presenter import MainPresenter
from niti.utils.constants import APP_NAME


class Container:
    """
    Lightweight DI container:
      - Reads configuration and wires default services if not provided
      - Builds the Gateway and both session managers on top of it
      - Builds the MainWindow and attaches its presenter
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        files: IFileService | None = None,
        serial_ports: ISerialPortService | None = None,
        builder: IBuildService | None = None,
        gateway: IGateway | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        links: ILinkOpener | None = None,
    ) -> None:
        self.config = config or build_app_config()

        self.file_service: IFileService = files or FileService()
        self.serial_port_service: ISerialPortService = serial_ports or SerialPortService(
            baud_rate=self.config.baud_rate,
            read_timeout_ms=self.config.read_timeout_ms,
        )
        self.build_service: IBuildService = builder or BuildService(
            build_command=self.config.build_command,
            run_command=self.config.run_command,
        )
        self.gateway: IGateway = gateway or LocalGateway(
            self.file_service, self.serial_port_service, self.build_service
        )

        self.dialogs = dialogs or QtFileDialogService()
        self.messages = messages or QtMessageService()
        self.links = links or QtLinkOpener()

        self.documents = DocumentSessionManager(
            self.gateway,
            self.dialogs,
            default_extension=self.config.default_extension,
            default_content=self.config.default_content,
        )
        self.serial = SerialSessionManager(
            self.gateway, poll_interval_ms=self.config.poll_interval_ms
        )

    @staticmethod
    def default(*, explicit_ini: Path | None = None) -> Container:
        return Container(build_app_config(explicit_ini=explicit_ini))

    # ---------- UI factories ----------

    def build_main_presenter(self, window: MainWindow) -> MainPresenter:
        return MainPresenter(
            view=window,
            documents=self.documents,
            serial=self.serial,
            gateway=self.gateway,
            messages=self.messages,
            window=window,
            links=self.links,
            font_size=self.config.font_size,
            version=self.config.get_version(),
            source_url=self.config.source_url,
        )

    def build_main_window(
        self,
        *,
        start_paths: list[Path] | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the MainWindow, attach its presenter and open any start files."""
        window = MainWindow(self.documents, self.serial, app_title=app_title)

        # Dialogs/messages default to the window as their parent.
        for port in (self.dialogs, self.messages):
            if hasattr(port, "set_default_parent"):
                port.set_default_parent(window)

        presenter = self.build_main_presenter(window)
        window.attach_presenter(presenter)
        presenter.start()

        for path in start_paths or []:
            self.documents.open_document(path)
        return window
