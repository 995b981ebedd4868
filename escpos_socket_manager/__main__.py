from escpos_socket_manager.cli import app

app(prog_name="escpos-socket")
