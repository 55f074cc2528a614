"""Blocking reading algorithms for common stream formats.

Each module provides plain functions that take a file-like object and
return one parsed object, raising EOFError when the stream ends
cleanly before an object starts.  They work on any blocking file, and
on a `jhsiao.resumable.stream.VirtualStream` they can be suspended and
resumed mid-object.  Each module also has a Reader bound to its parse
function.
"""
