"""Sends and modifies files under a root directory over HTTP.

curl localhost:3000/foo.jpg -F file=@foo.jpg -F action=save
curl localhost:3000/test.txt -F file=@temp.txt -F action=append
curl localhost:3000/test.txt -F action=touch
curl localhost:3000/newdir -F action=makedir
curl localhost:3000/test.txt -F action=remove
"""

from .dispatcher import dispatch
from .file_service import create_app

__all__ = [
    "create_app",
    "dispatch",
]
