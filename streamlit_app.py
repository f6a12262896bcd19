from scribble.ui import page

page.render()
