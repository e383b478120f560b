"""
# Gamestruct: game asset formats for humans.

The formats handled here are binary containers and records found in game
archives: fixed headers checked against constants, sub-structures reached via
absolute offsets and, for params, records whose layout is supplied at decode
time as a textual schema.

Everything goes through a Cursor (gamestruct.streams), a byte buffer with a
position and a stack of saved positions:

 1. read_*()/write_*(): move linearly through the buffer
 2. step_in(offset)/step_out(): jump to an absolute offset and come back
    exactly where we were, so a sub-structure can be decoded without side
    effects on the caller
 3. assert_*(): read a value and fail if it's not the expected one, this is
    how each format validates itself field by field

A format is a class implementing the capabilities it supports

 - Decodable: decode(cursor) and read(bytes or path)
 - Encodable: encode(cursor) and write()

Decoding is all or nothing: any error is raised with the chain of the
structures being decoded and no partial object is returned.
"""
