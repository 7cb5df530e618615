__title__ = 'argscan'
__description__ = 'Line-by-line reading from files named on the command line, or from stdin when none are given'
__url__ = 'https://github.com/argscan/argscan'
__version__ = '2024.03.09'
__author__ = 'argscan contributors'
__author_email__ = 'argscan@users.noreply.github.com'
