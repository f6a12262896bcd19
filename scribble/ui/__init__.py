from . import state, canvas, client, controller
