""" Vector math, numeric guards and unit conversions """
