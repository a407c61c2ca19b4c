"""Test configuration and fixtures."""

import logfire

# Keep spans local; nothing leaves the test process
logfire.configure(send_to_logfire=False, console=False)
