"""Run the identity gateway: python -m mcidentity"""

import uvicorn

from mcidentity.config import load_config

config = load_config()
uvicorn.run("mcidentity.app:create_app", host=config.host, port=config.port, factory=True)
