# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Domain names and IP addresses in the text should be the ones reserved
for documentation: RFC 2606 and RFC 6761 for names, RFC 5737 and RFC 6676
for IPv4, RFC 3849 for IPv6."""

import ipaddress

from idnits import modes, patterns
from idnits.nits import WARN, NONE, report, rule
from idnits.xmlparser import running_text

FQDN_NOT_EXAMPLE           = rule('FQDN_NOT_EXAMPLE',           WARN, WARN, NONE)
IPV4_PRIVATE_NOT_EXAMPLE   = rule('IPV4_PRIVATE_NOT_EXAMPLE',   WARN, WARN, NONE)
IPV4_MULTICAST_NOT_EXAMPLE = rule('IPV4_MULTICAST_NOT_EXAMPLE', WARN, WARN, NONE)
IPV4_GENERIC_NOT_EXAMPLE   = rule('IPV4_GENERIC_NOT_EXAMPLE',   WARN, WARN, NONE)
IPV6_LOCAL_NOT_EXAMPLE     = rule('IPV6_LOCAL_NOT_EXAMPLE',     WARN, WARN, NONE)
IPV6_LINK_NOT_EXAMPLE      = rule('IPV6_LINK_NOT_EXAMPLE',      WARN, WARN, NONE)
IPV6_GENERIC_NOT_EXAMPLE   = rule('IPV6_GENERIC_NOT_EXAMPLE',   WARN, WARN, NONE)

IPV4_EXAMPLE_NETWORKS = [ ipaddress.ip_network(n) for n in [
    '192.0.2.0/24', '198.51.100.0/24', '203.0.113.0/24',  # RFC 5737
    '233.252.0.0/24',                                   # RFC 6676
] ]
IPV4_PRIVATE_NETWORKS = [ ipaddress.ip_network(n) for n in [ '10.0.0.0/8', '172.16.0.0/12', '192.168.0.0/16', ] ]
IPV6_EXAMPLE_NETWORK = ipaddress.ip_network('2001:db8::/32')
IPV6_LOCAL_NETWORK = ipaddress.ip_network('fc00::/7')
IPV6_LINK_NETWORK = ipaddress.ip_network('fe80::/10')

def unique(l):
    seen = []
    for i in l:
        if not i in seen:
            seen.append(i)
    return seen

def is_example_domain(domain):
    domain = domain.lower().rstrip('.')
    labels = domain.split('.')
    if labels[-1] in patterns.RESERVED_TLDS:
        return True
    for allowed in patterns.EXAMPLE_DOMAINS + patterns.ALLOWED_DOMAINS:
        if domain == allowed or domain.endswith('.' + allowed):
            return True
    return False

def is_file_name(domain):
    return domain.lower().split('.')[-1] in patterns.FILE_EXTENSIONS

def addresses(doc):
    "The domain names, IPv4 and IPv6 address candidates found in the document"
    if doc.type == 'txt':
        extracted = doc.data.extracted
        return extracted.fqdn_domains, extracted.ipv4, extracted.ipv6
    text = running_text(doc.root)
    return ([ m.group('domain') for m in patterns.FQDN_RE.finditer(text) ],
            [ m.group(0) for m in patterns.IPV4_RE.finditer(text) ],
            [ m.group(0) for m in patterns.IPV6_LOOSE_RE.finditer(text) ])

# ----------------------------------------------------------------------

async def validate_fqdn(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    domains, __, __ = addresses(doc)
    for domain in unique(domains):
        if is_file_name(domain) or is_example_domain(domain):
            continue
        report(nits, FQDN_NOT_EXAMPLE, mode,
            "Found domain name '%s', which is not one reserved for documentation (RFC 2606, RFC 6761)." % domain,
            ref='https://www.rfc-editor.org/info/rfc6761')
    return nits

async def validate_ipv4(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    __, candidates, __ = addresses(doc)
    for candidate in unique(candidates):
        try:
            address = ipaddress.IPv4Address(candidate)
        except ValueError:
            continue
        if any( address in n for n in IPV4_EXAMPLE_NETWORKS ):
            continue
        if address.is_loopback or address.is_unspecified or address == ipaddress.IPv4Address('255.255.255.255'):
            continue
        if any( address in n for n in IPV4_PRIVATE_NETWORKS ):
            report(nits, IPV4_PRIVATE_NOT_EXAMPLE, mode,
                "Found private IPv4 address %s; documentation addresses (RFC 5737) should be used instead." % address,
                ref='https://www.rfc-editor.org/info/rfc5737')
        elif address.is_multicast:
            report(nits, IPV4_MULTICAST_NOT_EXAMPLE, mode,
                "Found multicast IPv4 address %s; documentation addresses (RFC 6676) should be used instead." % address,
                ref='https://www.rfc-editor.org/info/rfc6676')
        else:
            report(nits, IPV4_GENERIC_NOT_EXAMPLE, mode,
                "Found IPv4 address %s, which is not one reserved for documentation (RFC 5737)." % address,
                ref='https://www.rfc-editor.org/info/rfc5737')
    return nits

async def validate_ipv6(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    __, __, candidates = addresses(doc)
    for candidate in unique(candidates):
        try:
            address = ipaddress.IPv6Address(candidate)
        except ValueError:
            continue
        if address in IPV6_EXAMPLE_NETWORK or address.is_loopback or address.is_unspecified:
            continue
        if address in IPV6_LOCAL_NETWORK:
            report(nits, IPV6_LOCAL_NOT_EXAMPLE, mode,
                "Found unique local IPv6 address %s; documentation addresses (RFC 3849) should be used instead." % candidate,
                ref='https://www.rfc-editor.org/info/rfc3849')
        elif address in IPV6_LINK_NETWORK:
            report(nits, IPV6_LINK_NOT_EXAMPLE, mode,
                "Found link local IPv6 address %s; documentation addresses (RFC 3849) should be used instead." % candidate,
                ref='https://www.rfc-editor.org/info/rfc3849')
        else:
            report(nits, IPV6_GENERIC_NOT_EXAMPLE, mode,
                "Found IPv6 address %s, which is not one reserved for documentation (RFC 3849)." % candidate,
                ref='https://www.rfc-editor.org/info/rfc3849')
    return nits
