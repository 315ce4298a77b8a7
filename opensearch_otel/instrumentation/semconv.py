"""Semantic convention constants for OpenSearch client spans.

See https://opentelemetry.io/docs/specs/semconv/database/elasticsearch/ for
the attribute definitions. Changing any of these breaks downstream dashboards.
"""

SCHEMA_URL = "https://opentelemetry.io/schemas/1.21.0"
TRACER_NAME = "opensearch-api"

DB_SYSTEM_OPENSEARCH = "opensearch"

ATTR_DB_SYSTEM = "db.system"
ATTR_DB_STATEMENT = "db.statement"
ATTR_DB_OPERATION = "db.operation"
ATTR_HTTP_REQUEST_METHOD = "http.request.method"
ATTR_URL_FULL = "url.full"
ATTR_SERVER_ADDRESS = "server.address"
ATTR_SERVER_PORT = "server.port"

# Endpoints whose request body may be recorded as db.statement.
SEARCH_ENDPOINTS: frozenset[str] = frozenset(
    {
        "search",
        "msearch",
        "terms_enum",
        "search_template",
        "msearch_template",
        "render_search_template",
    }
)
