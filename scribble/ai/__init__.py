from . import err, replicate
