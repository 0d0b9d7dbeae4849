"""
Tests for the rasdial and net use output parsers.
"""

import pytest

from upv.services.parsers import (
    is_in_use_prompt,
    net_use_error_message,
    parse_name_list,
    parse_net_use_error,
    parse_net_use_list,
    parse_rasdial_result,
    parse_rasdial_status,
)


class TestRasdialResult:
    """Test interpretation of rasdial dial and hang-up output."""

    def test_english_success(self):
        stdout = "Connecting to UPV...\nVerifying username and password...\nConnected to UPV.\nCommand completed successfully.\n"
        outcome = parse_rasdial_result(stdout, "", 0)

        assert outcome.success is True
        assert outcome.recognized is True

    def test_spanish_success(self):
        stdout = "Conectando con UPV...\nConectado a UPV.\nEl comando se completó correctamente.\n"
        outcome = parse_rasdial_result(stdout, "", 0)

        assert outcome.success is True

    def test_remote_access_error(self):
        stdout = (
            "Connecting to UPV...\n"
            "Remote Access error 691 - The remote connection was denied.\n"
        )
        outcome = parse_rasdial_result(stdout, "", 691)

        assert outcome.success is False
        assert outcome.error_code == 691
        assert outcome.message == "The remote connection was denied."

    def test_spanish_remote_access_error(self):
        stdout = "Error de acceso remoto 623 - No se encontró la entrada de la libreta de teléfonos.\n"
        outcome = parse_rasdial_result(stdout, "", 623)

        assert outcome.success is False
        assert outcome.error_code == 623

    def test_error_line_wins_over_exit_status(self):
        """A Remote Access error is a failure even if rasdial exits 0."""
        outcome = parse_rasdial_result("Remote Access error 800 - Unable to establish.\n", "", 0)

        assert outcome.success is False
        assert outcome.error_code == 800

    def test_nonzero_exit_without_message(self):
        outcome = parse_rasdial_result("", "", 718)

        assert outcome.success is False
        assert outcome.error_code == 718
        assert "718" in outcome.message

    def test_unrecognized_output(self):
        outcome = parse_rasdial_result("Something unexpected\n", "", 0)

        assert outcome.success is False
        assert outcome.recognized is False
        assert outcome.message == "Something unexpected"

    def test_empty_output_is_unrecognized(self):
        outcome = parse_rasdial_result("", "", 0)

        assert outcome.recognized is False


class TestRasdialStatus:
    """Test parsing of plain rasdial output."""

    def test_no_connections(self):
        status = parse_rasdial_status("No connections\r\nCommand completed successfully.\r\n")

        assert status.connected is False
        assert status.active_connections == []

    def test_spanish_no_connections(self):
        status = parse_rasdial_status("No hay conexiones\r\nEl comando se completó correctamente.\r\n")

        assert status.connected is False

    def test_connected(self):
        status = parse_rasdial_status("Connected to\r\nUPV\r\nWork\r\nCommand completed successfully.\r\n")

        assert status.connected is True
        assert status.active_connections == ["UPV", "Work"]

    def test_spanish_connected(self):
        status = parse_rasdial_status("Conectado a\r\nUPV\r\nEl comando se completó correctamente.\r\n")

        assert status.active_connections == ["UPV"]

    @pytest.mark.parametrize("stdout", ["", "Unexpected banner\nUPV\n"])
    def test_unrecognized(self, stdout):
        assert parse_rasdial_status(stdout) is None


class TestNameList:

    def test_blank_lines_and_duplicates(self):
        assert parse_name_list("UPV\r\n\r\nUPV Home\r\nUPV\r\n") == ["UPV", "UPV Home"]


class TestNetUseErrors:
    """Test net use error extraction."""

    def test_system_error_number(self):
        text = "System error 85 has occurred.\r\n\r\nThe local device name is already in use.\r\n"

        assert parse_net_use_error(text) == 85
        assert net_use_error_message(text) == "The local device name is already in use."

    def test_spanish_system_error(self):
        text = "Error de sistema 53.\r\n\r\nNo se ha encontrado la ruta de acceso de la red.\r\n"

        assert parse_net_use_error(text) == 53
        assert net_use_error_message(text) == "No se ha encontrado la ruta de acceso de la red."

    def test_no_error_number(self):
        assert parse_net_use_error("The command completed successfully.") is None
        assert net_use_error_message("Something else") == "Something else"

    def test_in_use_prompt(self):
        text = (
            "There are open files and/or incomplete directory searches pending on the connection to W:.\r\n\r\n"
            "Is it OK to continue disconnecting and force them closed? (Y/N) [N]:\r\n"
        )
        assert is_in_use_prompt(text) is True

    def test_spanish_in_use_prompt(self):
        text = "Hay archivos abiertos en W:.\r\n¿Desea continuar la desconexión y forzar el cierre? (S/N) [N]:\r\n"

        assert is_in_use_prompt(text) is True

    def test_not_in_use_prompt(self):
        assert is_in_use_prompt("System error 2250 has occurred.") is False


class TestNetUseList:
    """Test parsing of the net use table."""

    LISTING = (
        "New connections will not be remembered.\r\n"
        "\r\n"
        "\r\n"
        "Status       Local     Remote                    Network\r\n"
        "\r\n"
        "-------------------------------------------------------------------------------\r\n"
        "OK           W:        \\\\nasupv.upv.es\\discos\\j\\jdoe\r\n"
        "                                                Microsoft Windows Network\r\n"
        "Unavailable  Z:        \\\\fileserver\\share         Microsoft Windows Network\r\n"
        "OK                     \\\\fileserver\\IPC$          Microsoft Windows Network\r\n"
        "The command completed successfully.\r\n"
    )

    def test_mappings(self):
        drives = parse_net_use_list(self.LISTING)

        assert [d.letter for d in drives] == ["W", "Z"]
        assert drives[0].remote_path == "\\\\nasupv.upv.es\\discos\\j\\jdoe"
        assert drives[0].status == "OK"
        assert drives[0].network == "Microsoft Windows Network"
        assert drives[1].status == "Unavailable"
        assert drives[1].network == "Microsoft Windows Network"

    def test_blank_status(self):
        listing = (
            "----------------------------------------------\r\n"
            "             W:        \\\\nasupv.upv.es\\alumnos\\j\\jdoe\r\n"
        )
        drives = parse_net_use_list(listing)

        assert len(drives) == 1
        assert drives[0].status is None

    def test_remote_path_with_spaces(self):
        listing = (
            "Status       Local     Remote                    Network\r\n"
            "\r\n"
            "-------------------------------------------------------------------------------\r\n"
            "OK           S:        \\\\fs\\my share             Microsoft Windows Network\r\n"
            "OK           T:        \\\\fileserver\\team folder\\projects\r\n"
            "                                                Microsoft Windows Network\r\n"
        )
        drives = parse_net_use_list(listing)

        assert [(d.letter, d.remote_path, d.network) for d in drives] == [
            ("S", "\\\\fs\\my share", "Microsoft Windows Network"),
            ("T", "\\\\fileserver\\team folder\\projects", "Microsoft Windows Network"),
        ]

    def test_remote_path_with_spaces_without_header(self):
        listing = (
            "----------------------------------------------\r\n"
            "OK           S:        \\\\fs\\my share             Microsoft Windows Network\r\n"
        )
        drives = parse_net_use_list(listing)

        assert drives[0].remote_path == "\\\\fs\\my share"
        assert drives[0].network == "Microsoft Windows Network"

    def test_no_entries(self):
        assert parse_net_use_list("New connections will be remembered.\r\n\r\nThere are no entries in the list.\r\n\r\n") == []
