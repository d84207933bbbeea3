"""
Standard PAC helper functions loaded ahead of every PAC script.

``dnsResolve``, ``myIpAddress`` and ``alert`` are provided from Python.
"""

PAC_UTILS = r"""
function dnsDomainIs(host, domain) {
    return (host.length >= domain.length &&
            host.substring(host.length - domain.length) == domain);
}

function dnsDomainLevels(host) {
    return host.split('.').length - 1;
}

function isPlainHostName(host) {
    return host.indexOf('.') == -1;
}

function localHostOrDomainIs(host, hostdom) {
    return (host == hostdom) || (hostdom.lastIndexOf(host + '.', 0) == 0);
}

function isResolvable(host) {
    var ip = dnsResolve(host);
    return (ip != null && ip != '');
}

function isValidIpAddress(ipchars) {
    var matches = /^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$/.exec(ipchars);
    if (matches == null) {
        return false;
    }
    for (var i = 1; i <= 4; i++) {
        if (parseInt(matches[i], 10) > 255) {
            return false;
        }
    }
    return true;
}

function convert_addr(ipchars) {
    var bytes = ipchars.split('.');
    return ((bytes[0] & 0xff) << 24) |
           ((bytes[1] & 0xff) << 16) |
           ((bytes[2] & 0xff) << 8) |
           (bytes[3] & 0xff);
}

function isInNet(ipaddr, pattern, maskstr) {
    if (!isValidIpAddress(pattern) || !isValidIpAddress(maskstr)) {
        return false;
    }
    if (!isValidIpAddress(ipaddr)) {
        ipaddr = dnsResolve(ipaddr);
        if (!ipaddr) {
            return false;
        }
    }
    var host = convert_addr(ipaddr);
    var pat = convert_addr(pattern);
    var mask = convert_addr(maskstr);
    return ((host & mask) == (pat & mask));
}

function shExpMatch(url, pattern) {
    pattern = pattern.replace(/[.+^${}()|[\]\\]/g, '\\$&');
    pattern = pattern.replace(/\*/g, '.*');
    pattern = pattern.replace(/\?/g, '.');
    return new RegExp('^' + pattern + '$').test(url);
}

var wdays = {SUN: 0, MON: 1, TUE: 2, WED: 3, THU: 4, FRI: 5, SAT: 6};
var months = {JAN: 0, FEB: 1, MAR: 2, APR: 3, MAY: 4, JUN: 5,
              JUL: 6, AUG: 7, SEP: 8, OCT: 9, NOV: 10, DEC: 11};

function weekdayRange() {
    function getDay(weekday) {
        if (weekday in wdays) {
            return wdays[weekday];
        }
        return -1;
    }
    var date = new Date();
    var argc = arguments.length;
    var wday;
    if (argc < 1) {
        return false;
    }
    if (arguments[argc - 1] == 'GMT') {
        argc--;
        wday = date.getUTCDay();
    } else {
        wday = date.getDay();
    }
    var wd1 = getDay(arguments[0]);
    var wd2 = (argc == 2) ? getDay(arguments[1]) : wd1;
    if (wd1 == -1 || wd2 == -1) {
        return false;
    }
    if (wd1 <= wd2) {
        return (wd1 <= wday && wday <= wd2);
    }
    return (wd2 >= wday || wday >= wd1);
}

function _toGMT(date) {
    return new Date(date.getUTCFullYear(), date.getUTCMonth(), date.getUTCDate(),
                    date.getUTCHours(), date.getUTCMinutes(), date.getUTCSeconds());
}

function _inRange(date1, date, date2) {
    return (date1 <= date2) ? (date1 <= date) && (date <= date2)
                            : (date2 >= date) || (date >= date1);
}

function dateRange() {
    function getMonth(name) {
        if (name in months) {
            return months[name];
        }
        return -1;
    }
    var date = new Date();
    var argc = arguments.length;
    if (argc < 1) {
        return false;
    }
    var isGMT = (arguments[argc - 1] == 'GMT');
    if (isGMT) {
        argc--;
        date = _toGMT(date);
    }
    if (argc == 1) {
        var value = parseInt(arguments[0], 10);
        if (isNaN(value)) {
            return date.getMonth() == getMonth(arguments[0]);
        } else if (value < 32) {
            return date.getDate() == value;
        }
        return date.getFullYear() == value;
    }
    var year = date.getFullYear();
    var date1 = new Date(year, 0, 1, 0, 0, 0);
    var date2 = new Date(year, 11, 31, 23, 59, 59);
    var adjustMonth = false;
    var i, value;
    for (i = 0; i < (argc >> 1); i++) {
        value = parseInt(arguments[i], 10);
        if (isNaN(value)) {
            date1.setMonth(getMonth(arguments[i]));
        } else if (value < 32) {
            adjustMonth = (argc <= 2);
            date1.setDate(value);
        } else {
            date1.setFullYear(value);
        }
    }
    for (i = (argc >> 1); i < argc; i++) {
        value = parseInt(arguments[i], 10);
        if (isNaN(value)) {
            date2.setMonth(getMonth(arguments[i]));
        } else if (value < 32) {
            date2.setDate(value);
        } else {
            date2.setFullYear(value);
        }
    }
    if (adjustMonth) {
        date1.setMonth(date.getMonth());
        date2.setMonth(date.getMonth());
    }
    return _inRange(date1, date, date2);
}

function timeRange() {
    var argc = arguments.length;
    var date = new Date();
    if (argc < 1) {
        return false;
    }
    if (arguments[argc - 1] == 'GMT') {
        argc--;
        date = _toGMT(date);
    }
    var hour = date.getHours();
    if (argc == 1) {
        return hour == arguments[0];
    } else if (argc == 2) {
        return (arguments[0] <= hour) && (hour <= arguments[1]);
    }
    var date1 = new Date(date.getTime());
    var date2 = new Date(date.getTime());
    switch (argc) {
    case 6:
        date1.setSeconds(arguments[2]);
        date2.setSeconds(arguments[5]);
    case 4:
        var middle = argc >> 1;
        date1.setHours(arguments[0]);
        date1.setMinutes(arguments[1]);
        date2.setHours(arguments[middle]);
        date2.setMinutes(arguments[middle + 1]);
        if (middle == 2) {
            date1.setSeconds(0);
            date2.setSeconds(59);
        }
        break;
    default:
        throw new Error('timeRange: bad number of arguments');
    }
    return _inRange(date1, date, date2);
}
"""

# Appended after the user script so a missing entry point fails at compile time
PAC_ENTRY_CHECK = """
if (typeof FindProxyForURL !== 'function') {
    throw new Error('FindProxyForURL is not defined');
}
"""
