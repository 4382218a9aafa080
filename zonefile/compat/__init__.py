"""Compatibility layer for reproducing historical reader behavior.

By default the 64-bit data block of a v2+ TZif file is always used when it
is present. Some readers historically selected the data block based on the
word size of the running platform instead, and kept the 32-bit block on
32-bit platforms. That behavior may be reproduced for parity testing:

```python
from zonefile import read_tzif
from zonefile.compat import body_compat

with body_compat.enable_native_word_size_selection():
    zone_info = read_tzif(content)
```
"""
