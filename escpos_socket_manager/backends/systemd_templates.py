"""systemd unit file templates for the printer socket."""

# Listens on the configured address and hands every accepted connection
# to a fresh instance of the template service.
SOCKET_UNIT_TEMPLATE = """[Unit]
Description=ESC/POS Printer Socket

[Socket]
ListenStream={listen_stream}
Accept=yes

[Install]
WantedBy=sockets.target
"""

# Instantiated once per connection. tee copies the socket stream to
# /dev/null as well, which gives the printer a few microseconds to pick
# up the job.
SERVICE_UNIT_TEMPLATE = """[Unit]
Description=ESC/POS Printer Service

[Service]
ExecStart=-/usr/bin/tee /dev/null > {printer_path}
StandardInput=socket
Environment="VERSION={version}"
"""
