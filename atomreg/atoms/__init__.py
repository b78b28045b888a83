"""
Atoms and their coefficients: the active set, the l1 norm
used to constrain coefficients and projection onto the l1 ball.
"""
