"""Parsing, checking, rewriting and code generation for pattern queries."""