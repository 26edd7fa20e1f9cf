"""Settings package for the office booking project.

`base.py` contains the configuration shared across environments. The
`dev.py`, `prod.py` and `test.py` modules extend it with environment
specific overrides.
"""
