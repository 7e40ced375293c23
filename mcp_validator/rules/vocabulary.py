"""
Heuristic vocabularies used by the naming, security, LLM-compatibility and
best-practice rules.

Everything here is data. The rules consume these tables through the generic
helpers in mcp_validator.rules.matching, so tuning a heuristic means editing
a table, not a check.
"""

# --- Naming ----------------------------------------------------------------

# Verbs a tool name is expected to start with (NAM-005)
NAME_VERBS = frozenset({
    # CRUD
    "get", "create", "update", "delete", "list",
    # Search / query
    "search", "find", "fetch", "query", "lookup",
    # Modification
    "add", "remove", "set", "edit", "modify",
    # Validation / analysis
    "check", "validate", "verify", "analyze", "inspect",
    # Actions
    "run", "execute", "process", "send", "submit",
    # Files
    "read", "write", "save", "load", "export", "import", "move", "copy", "rename",
    # Archives
    "zip", "unzip", "compress", "decompress", "extract", "archive",
    # Output
    "print", "echo", "log", "show", "display", "render",
    # State
    "open", "close", "init", "initialize", "connect", "disconnect",
    # Testing
    "sample", "test", "try", "ping",
    # Everything else
    "start", "stop", "enable", "disable", "generate", "convert", "transform",
    "format", "parse", "sync", "refresh", "clear", "reset", "count", "calculate",
    "compare", "merge", "split", "filter", "sort", "group", "map", "reduce",
    "apply", "call", "invoke", "trigger", "notify", "publish", "subscribe",
    "download", "upload", "install", "uninstall", "register", "unregister",
    "authenticate", "authorize", "revoke", "cancel", "abort", "terminate", "kill",
    "clone", "fork", "branch", "checkout", "commit", "push", "pull", "revert",
    "rollback", "deploy", "build", "compile", "bundle", "minify", "optimize",
    "lint", "scan", "detect", "monitor", "watch", "track", "record", "replay",
    "undo", "redo", "backup", "restore", "encrypt", "decrypt", "sign", "hash",
    "encode", "decode", "serialize", "deserialize", "sanitize", "escape",
    "unescape", "wrap", "unwrap", "bind", "unbind", "attach", "detach", "mount",
    "unmount", "lock", "unlock", "grant", "deny", "allow", "block", "accept",
    "reject", "approve", "request", "respond", "handle", "dispatch", "route",
    "forward", "redirect", "proxy", "cache", "flush", "purge", "invalidate",
    "expire", "extend", "renew", "schedule", "queue", "dequeue", "enqueue", "pop",
    "peek", "poll", "wait", "sleep", "pause", "resume", "retry", "repeat", "loop",
    "iterate", "traverse", "visit", "walk", "crawl", "scrape", "harvest",
    "collect", "gather", "aggregate", "summarize", "report", "dump", "stream",
    "pipe", "tee", "broadcast", "multicast", "unicast",
})

SUGGESTED_NAME_PREFIXES = (
    "get-", "create-", "update-", "delete-", "list-", "search-", "find-",
    "fetch-", "add-", "remove-", "set-", "check-", "validate-",
)

# --- Security --------------------------------------------------------------

# Parameter names that legitimately hold large text (exempt from SEC-001)
CONTENT_FIELD_PATTERNS = (
    r"^contents?$", r"^body$", r"^text$", r"^messages?$", r"^prompt$",
    r"^thoughts?$", r"^input$", r"^output$", r"^response$", r"^code$",
    r"^script$", r"^source$", r"^data$", r"^payload$", r"^json$", r"^xml$",
    r"^html$", r"^markdown$", r"^query$", r"^sql$", r"^graphql$",
    r"content$", r"body$", r"text$", r"data$",
)

PATH_NAME_PATTERNS = (r"path", r"file", r"dir", r"directory", r"folder", r"filename")

URL_NAME_PATTERNS = (r"url", r"uri", r"href", r"link", r"endpoint")

COMMAND_NAME_PATTERNS = (
    r"^command$", r"^query$", r"^action$", r"^method$", r"^operation$",
    r"^mode$", r"^type$", r"^kind$",
)

SENSITIVE_NAME_PATTERNS = (
    r"password", r"passwd", r"token", r"secret", r"api[_-]?key", r"apikey",
    r"auth", r"credential", r"private[_-]?key", r"access[_-]?key",
)

CODE_NAME_PATTERNS = (
    r"^script$", r"^code$", r"^eval$", r"^exec$", r"^execute$", r"^command$",
    r"^cmd$", r"^shell$", r"^expression$", r"^query$", r"^sql$",
    r"^javascript$", r"^python$", r"^bash$",
)

DANGER_WORDS_PATTERN = r"danger|warning|security|caution|risk|unsafe|untrusted"

# --- LLM compatibility -----------------------------------------------------

# Whole-word verbs that say what a tool does (LLM-003)
ACTION_VERBS = frozenset({
    "get", "gets", "retrieve", "retrieves", "fetch", "fetches", "read", "reads",
    "return", "returns", "list", "lists", "find", "finds", "search", "searches",
    "query", "queries", "look", "looks", "lookup", "lookups", "load", "loads",
    "create", "creates", "add", "adds", "insert", "inserts", "generate",
    "generates", "make", "makes", "build", "builds", "produce", "produces",
    "update", "updates", "modify", "modifies", "edit", "edits", "change",
    "changes", "set", "sets", "replace", "replaces", "rename", "renames",
    "delete", "deletes", "remove", "removes", "clear", "clears", "purge", "purges",
    "send", "sends", "post", "posts", "publish", "publishes", "notify",
    "notifies", "upload", "uploads", "download", "downloads",
    "write", "writes", "save", "saves", "store", "stores", "export", "exports",
    "import", "imports", "copy", "copies", "move", "moves",
    "run", "runs", "execute", "executes", "start", "starts", "stop", "stops",
    "trigger", "triggers", "invoke", "invokes", "call", "calls",
    "validate", "validates", "check", "checks", "verify", "verifies",
    "analyze", "analyzes", "analyse", "analyses", "inspect", "inspects",
    "scan", "scans", "detect", "detects", "monitor", "monitors",
    "convert", "converts", "transform", "transforms", "parse", "parses",
    "format", "formats", "translate", "translates", "encode", "encodes",
    "decode", "decodes", "compress", "compresses", "extract", "extracts",
    "calculate", "calculates", "compute", "computes", "count", "counts",
    "compare", "compares", "merge", "merges", "split", "splits", "sort", "sorts",
    "filter", "filters", "summarize", "summarizes", "aggregate", "aggregates",
    "open", "opens", "close", "closes", "connect", "connects", "sync", "syncs",
    "schedule", "schedules", "cancel", "cancels", "approve", "approves",
    "reject", "rejects", "deploy", "deploys", "install", "installs",
    "render", "renders", "display", "displays", "show", "shows", "print", "prints",
    "provide", "provides", "manage", "manages", "resolve", "resolves",
})

WHEN_PHRASES = (
    "when", "if ", "use this to", "use this for", "use this when", "used to",
    "used for", "used when", "useful for", "useful when", "helps to",
    "helps with", "for ", "in order to", "to ", "allows you to", "enables",
    "lets you", "designed for", "intended for", "meant for", "best for",
    "ideal for", "suitable for", "appropriate when", "recommended when",
    "should be used", "can be used", "typically used", "commonly used",
    "primarily used", "mainly used", "often used", "especially useful",
    "particularly useful", "helpful for", "helpful when",
)

EXAMPLE_PHRASES = (
    "example", "e.g.", "e.g,", "eg.", "eg:", "for instance", "for example",
    "such as", "like ", "including", "sample", "```", '"', "'",
)

EXAMPLE_PATTERNS = (
    r"\b\w+\s*=\s*[\"'][^\"']+[\"']",
    r"\b\w+:\s*[\"'][^\"']+[\"']",
    r"`[^`]+`",
    r"(?i)\(\s*e\.?g\.?\s+",
)

AMBIGUOUS_TERMS = (
    "data", "value", "input", "output", "info", "stuff", "thing", "item",
    "object", "result", "response", "payload", "content", "body", "param",
    "arg", "argument", "parameter", "var", "variable", "prop", "property",
    "field", "attr", "attribute", "opts", "options", "config", "settings",
    "details", "misc", "other", "extra", "additional", "temp", "tmp", "foo",
    "bar", "baz", "test",
)

CONTEXT_INDICATORS = (
    "user", "file", "path", "url", "name", "id", "email", "phone", "address",
    "date", "time", "status", "type", "format", "size", "count", "number",
    "amount", "price", "quantity", "index", "offset", "limit", "page", "query",
    "filter", "sort", "order", "search", "message", "text", "title",
    "description", "label", "tag", "category", "group", "list", "array",
    "collection", "set", "map", "dictionary", "hash", "key", "token", "secret",
    "password", "credential", "auth", "session", "request", "error", "success",
    "failure", "code", "reason", "source", "target", "destination", "origin",
    "start", "end", "from", "to", "min", "max", "default", "required",
    "optional",
)

# Schema constraint -> (friendly name, phrasings that count as documenting it)
CONSTRAINT_MENTIONS: dict[str, tuple[str, tuple[str, ...]]] = {
    "minimum": ("minimum value", (
        r"\bmin(imum)?\b", r"\bat\s+least\b", r"\bgreater\s+than\b", r">=?\s*\d",
        r"\bno\s+less\s+than\b", r"\blower\s+bound\b",
    )),
    "maximum": ("maximum value", (
        r"\bmax(imum)?\b", r"\bat\s+most\b", r"\bless\s+than\b", r"<=?\s*\d",
        r"\bno\s+more\s+than\b", r"\bupper\s+bound\b", r"\bup\s+to\b",
    )),
    "minLength": ("minimum length", (
        r"\bmin(imum)?\s*(length|chars?|characters?)\b",
        r"\bat\s+least\s+\d+\s*(chars?|characters?)\b",
        r"\blength.{0,20}(at\s+least|min|>=)",
    )),
    "maxLength": ("maximum length", (
        r"\bmax(imum)?\s*(\d+\s*)?(length|chars?|characters?)\b",
        r"\bat\s+most\s+\d+\s*(chars?|characters?)\b",
        r"\blength.{0,20}(at\s+most|max|<=|up\s+to)",
        r"\bup\s+to\s+\d+\s*(chars?|characters?)\b",
        r"\bno\s+more\s+than\s+\d+\s*(chars?|characters?)\b",
        r"\btruncated?\b",
        r"\blimit(ed)?\s+to\b",
    )),
    "pattern": ("format pattern", (
        r"\bpattern\b", r"\bformat\b", r"\bregex\b", r"\bmust\s+match\b",
        r"\bshould\s+match\b", r"\bvalid\b", r"\blike\s+[\"'][^\"']+[\"']",
        r"\be\.?g\.?\s*[\"':]",
    )),
    "enum": ("allowed values", (
        r"\bone\s+of\b", r"\bmust\s+be\b", r"\bshould\s+be\b",
        r"\ballowed\s+values?\b", r"\bvalid\s+values?\b", r"\bpossible\s+values?\b",
        r"\boptions?\s*(are|:)", r"\b(can|may)\s+be\b",
        r"[\"'][^\"']+[\"'](\s*,\s*[\"'][^\"']+[\"']\s*(,|or|and))+",
    )),
    "format": ("format", (
        r"\bformat\b", r"\biso\s*\d*", r"\brfc\s*\d+", r"\buuid\b", r"\buri\b",
        r"\burl\b", r"\bemail\b", r"\bdate\b", r"\btime\b", r"\bdatetime\b",
        r"\bhostname\b", r"\bipv[46]?\b",
    )),
}

ABBREVIATIONS: dict[str, str] = {
    "id": "identifier", "num": "number", "str": "string", "cfg": "configuration",
    "env": "environment", "src": "source", "dst": "destination",
    "dest": "destination", "tmp": "temporary", "temp": "temporary",
    "pwd": "password or working directory", "cwd": "current working directory",
    "dir": "directory", "dirs": "directories", "fn": "function",
    "func": "function", "cb": "callback", "ctx": "context", "req": "request",
    "res": "response", "err": "error", "msg": "message", "msgs": "messages",
    "val": "value", "vals": "values", "len": "length", "idx": "index",
    "cnt": "count", "max": "maximum", "min": "minimum", "avg": "average",
    "asc": "ascending", "desc": "descending",
    "auth": "authentication/authorization", "creds": "credentials",
    "perms": "permissions", "usr": "user", "grp": "group",
    "org": "organization", "repo": "repository", "pkg": "package",
    "lib": "library", "api": "API (Application Programming Interface)",
    "sdk": "SDK (Software Development Kit)", "cli": "CLI (Command Line Interface)",
    "gui": "GUI (Graphical User Interface)", "db": "database",
    "sql": "SQL (Structured Query Language)", "tbl": "table", "col": "column",
    "cols": "columns", "lbl": "label", "img": "image", "imgs": "images",
    "doc": "document", "docs": "documents", "ref": "reference",
    "refs": "references", "attr": "attribute", "attrs": "attributes",
    "prop": "property", "props": "properties", "param": "parameter",
    "params": "parameters", "arg": "argument", "args": "arguments",
    "opt": "option", "opts": "options", "conf": "configuration",
    "config": "configuration", "init": "initialize", "exec": "execute",
    "proc": "process", "async": "asynchronous", "sync": "synchronous",
    "buf": "buffer", "fmt": "format", "ver": "version", "ts": "timestamp",
    "tz": "timezone", "utc": "UTC (Coordinated Universal Time)",
    "lat": "latitude", "lng": "longitude", "lon": "longitude",
    "geo": "geographic", "addr": "address", "tel": "telephone",
    "ext": "extension", "sku": "SKU (Stock Keeping Unit)", "qty": "quantity",
    "amt": "amount", "bal": "balance", "txn": "transaction", "inv": "invoice",
    "po": "purchase order", "rx": "receive", "tx": "transmit",
    "ack": "acknowledge", "nak": "negative acknowledge", "ttl": "time to live",
    "etag": "entity tag", "crc": "CRC (Cyclic Redundancy Check)",
    "md5": "MD5 hash", "sha": "SHA hash", "ssl": "SSL (Secure Sockets Layer)",
    "tls": "TLS (Transport Layer Security)", "jwt": "JWT (JSON Web Token)",
    "oauth": "OAuth", "oidc": "OIDC (OpenID Connect)", "saml": "SAML",
    "ldap": "LDAP", "sso": "SSO (Single Sign-On)",
    "mfa": "MFA (Multi-Factor Authentication)",
    "2fa": "2FA (Two-Factor Authentication)", "otp": "OTP (One-Time Password)",
    "uri": "URI (Uniform Resource Identifier)",
    "url": "URL (Uniform Resource Locator)", "urn": "URN (Uniform Resource Name)",
    "fqdn": "FQDN (Fully Qualified Domain Name)", "dns": "DNS (Domain Name System)",
    "ip": "IP address", "ipv4": "IPv4 address", "ipv6": "IPv6 address",
    "cidr": "CIDR notation", "mac": "MAC address",
    "nat": "NAT (Network Address Translation)", "vpn": "VPN (Virtual Private Network)",
    "cdn": "CDN (Content Delivery Network)", "lb": "load balancer",
    "gw": "gateway", "s3": "S3 (Simple Storage Service)", "k8s": "Kubernetes",
    "vm": "virtual machine", "cpu": "CPU", "gpu": "GPU", "ram": "RAM",
    "ssd": "SSD", "hdd": "HDD", "io": "I/O (Input/Output)",
    "stdin": "standard input", "stdout": "standard output",
    "stderr": "standard error", "fs": "file system", "os": "operating system",
    "pid": "process ID", "uid": "user ID", "gid": "group ID",
    "eof": "end of file", "eol": "end of line",
    "crlf": "carriage return + line feed", "lf": "line feed",
    "regex": "regular expression", "regexp": "regular expression",
    "html": "HTML", "xml": "XML", "json": "JSON", "yaml": "YAML",
    "toml": "TOML", "csv": "CSV", "tsv": "TSV", "b64": "Base64",
    "hex": "hexadecimal", "utf8": "UTF-8", "utf16": "UTF-16", "ascii": "ASCII",
    "wss": "WebSocket Secure", "ws": "WebSocket", "http": "HTTP",
    "https": "HTTPS", "ftp": "FTP", "sftp": "SFTP", "ssh": "SSH",
    "smtp": "SMTP", "imap": "IMAP", "pop3": "POP3",
}

# Words whose presence counts as explaining an abbreviation (LLM-010)
EXPLANATION_INDICATORS = (
    "identifier", "number", "string", "configuration", "environment", "source",
    "destination", "temporary", "password", "directory", "function", "callback",
    "context", "request", "response", "error", "message", "value", "length",
    "index", "count", "maximum", "minimum", "average", "authentication",
    "authorization", "credentials", "permissions", "user", "group",
    "organization", "repository", "package", "library", "interface",
    "database", "table", "column", "label", "image", "document", "reference",
    "attribute", "property", "parameter", "argument", "option", "initialize",
    "execute", "process", "asynchronous", "synchronous", "buffer", "format",
    "version", "timestamp", "timezone",
)

# Name segments suggesting a tool changes state (LLM-011)
SIDE_EFFECT_NAME_WORDS = (
    "create", "add", "new", "insert", "post", "make",
    "update", "edit", "modify", "change", "set", "put", "patch",
    "delete", "remove", "destroy", "drop", "clear", "purge", "reset",
    "send", "emit", "publish", "broadcast", "dispatch", "push", "notify",
    "write", "save", "store", "persist", "commit", "sync",
    "execute", "run", "trigger", "invoke", "fire", "start", "stop",
    "import", "export", "upload", "download",
    "move", "copy", "transfer", "migrate",
    "configure", "enable", "disable", "activate", "deactivate",
    "login", "logout", "signup", "register", "revoke",
    "approve", "reject", "cancel", "confirm",
)

SIDE_EFFECT_DESCRIPTION_PATTERNS = (
    r"\bcreates?\b", r"\badds?\b", r"\binserts?\b", r"\bgenerates?\b",
    r"\bproduces?\b", r"\bwill\s+create\b", r"\bwill\s+add\b",
    r"\bupdates?\b", r"\bmodif(y|ies)\b", r"\bchanges?\b", r"\bedits?\b",
    r"\bmutates?\b", r"\balters?\b", r"\bwill\s+update\b", r"\bwill\s+modify\b",
    r"\bdeletes?\b", r"\bremoves?\b", r"\bdestroys?\b", r"\bpurges?\b",
    r"\bclears?\b", r"\bwill\s+delete\b", r"\bwill\s+remove\b",
    r"\bpermanent(ly)?\b", r"\birreversible\b",
    r"\bsends?\b", r"\bemits?\b", r"\bpublishes?\b", r"\bbroadcasts?\b",
    r"\bdispatches?\b", r"\bpushes?\b", r"\bnotif(y|ies)\b", r"\bwill\s+send\b",
    r"\bwrites?\b", r"\bsaves?\b", r"\bstores?\b", r"\bpersists?\b",
    r"\bcommits?\b", r"\blogs?\b", r"\brecords?\b", r"\bwill\s+write\b",
    r"\bwill\s+save\b",
    r"\bexecutes?\b", r"\btriggers?\b", r"\binvokes?\b", r"\bfires?\b",
    r"\bstarts?\b", r"\bstops?\b", r"\blaunches?\b", r"\bterminates?\b",
    r"\bside\s+effects?\b", r"\bcauses?\b", r"\bresults?\s+in\b",
    r"\baffects?\b", r"\bimpacts?\b", r"\bnote\s*:", r"\bwarning\s*:",
    r"\bcaution\s*:", r"\bimportant\s*:",
    r"\bmakes?\s+(a\s+)?(api\s+)?call\b", r"\bcontacts?\b",
    r"\bconnects?\s+to\b", r"\brequests?\b",
    r"\bstate\s+change\b", r"\bmodifies?\s+state\b", r"\bupdates?\s+state\b",
)

DESTRUCTIVE_WORDING_PATTERN = (
    r"\b(destruct|delet|remov|destroy|permanent|irreversible|cannot\s+be\s+undone)"
)

# Leading verbs compared across same-prefix tools (LLM-012)
DESCRIPTION_LEAD_VERBS = frozenset({
    "creates", "create", "retrieves", "retrieve", "gets", "get",
    "updates", "update", "deletes", "delete", "removes", "remove",
    "lists", "list", "searches", "search", "finds", "find",
    "sends", "send", "fetches", "fetch", "returns", "return",
    "generates", "generate", "validates", "validate", "checks", "check",
    "sets", "set", "adds", "add", "inserts", "insert",
    "saves", "save", "loads", "load", "reads", "read", "writes", "write",
    "executes", "execute", "runs", "run", "starts", "start", "stops", "stop",
    "enables", "enable", "disables", "disable", "configures", "configure",
})

WORKFLOW_KEYWORDS = (
    "first", "before", "after", "then", "instead", "alternatively",
    "prerequisite", "requires", "following", "prior to", "once", "next",
    "finally", "subsequently", "in advance",
)

WORKFLOW_PATTERNS = (
    r"\buse\s+\w+\s+(?:for|to|when)",
    r"\bcall\s+\w+\s+(?:to|first|before|after)",
    r"\bsee\s+\w+\s+for",
    r"\bprefer\s+\w+",
    r"\brequires?\s+\w+",
    r"\brun\s+\w+\s+(?:first|before|after)",
    r"\binvoke\s+\w+",
)

# --- Best practice ---------------------------------------------------------

MODIFYING_NAME_PATTERNS = (
    r"^create", r"^update", r"^delete", r"^remove", r"^set", r"^add",
    r"^insert", r"^drop", r"^clear", r"^reset", r"^modify", r"^change",
    r"^write", r"^destroy", r"^purge",
    r"-create$", r"-update$", r"-delete$", r"-remove$", r"-set$",
)
