"""Typed, grouped command-line flags supporting POSIX and single-dash long styles."""