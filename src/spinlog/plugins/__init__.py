"""
Pipeline components for spinlog.

- formatters: line template and Elastic Common Schema documents
- processors: record enrichment applied before formatting
- sinks: file, standard stream, system log and the buffering decorator
"""
