import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Response

from app import server

server.wsgi_app = ProxyFix(server.wsgi_app)


def handler(event, context):
    """Serverless entry point: translate an HTTP event into a WSGI call."""
    builder = EnvironBuilder(
        path=event.get("path", "/"),
        method=event.get("httpMethod", "GET"),
        headers=event.get("headers", {}),
        query_string=event.get("queryStringParameters"),
        data=event.get("body", None),
    )
    env = builder.get_environ()
    resp = Response.from_app(server.wsgi_app, env)
    return {
        "statusCode": resp.status_code,
        "headers": dict(resp.headers),
        "body": resp.get_data(as_text=True),
    }
