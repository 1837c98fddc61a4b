"""
Release install service — fetch, verify and install a release binary.

Modules are laid out in onion layers, innermost first:

    data           static platform tables and host defaults
    domain         pure naming and manifest parsing, no I/O
    detection      read-only host probes (platform)
    resolver       tag resolution against the release host
    execution      downloads, hashing, extraction, file installs
    orchestration  the end-to-end pipeline

Import from the layer modules directly; this package does not
re-export them so the models can import ``data`` without cycles.
"""
