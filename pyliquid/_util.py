"""
pyliquid/_util.py

    internal module with general utility functions
"""


def _debug_handler(debug_flag, debug_cb, msg=None):
    """
    dispatches a debugging message from the parsers according to ``debug_flag``:
        None - message is dropped
        'text' - message is printed
        'textcb' - message is passed to ``debug_cb`` instead of being printed

    Parameters
    ----------
    debug_flag : ``str``
        how to dispatch the message, None to drop it
    debug_cb : ``func``
        callback that takes the message as its only argument, only used (and required) with 'textcb'
    msg : ``str``, optional
        debugging message, "DEBUG: " is prepended to it
    """
    if debug_flag is None:
        return
    if debug_flag not in ('text', 'textcb'):
        msg = '_debug_handler: unrecognized debug_flag "{}" (expected "text" or "textcb")'
        raise ValueError(msg.format(debug_flag))
    if debug_flag == 'textcb' and debug_cb is None:
        raise ValueError('_debug_handler: debug_flag was set to "textcb" but no debug_cb was provided')
    if msg is None:
        return
    msg = 'DEBUG: ' + msg
    if debug_flag == 'text':
        print(msg)
    else:
        debug_cb(msg)
