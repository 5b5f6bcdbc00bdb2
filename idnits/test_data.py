# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Documents shared by the idnits tests"""

TXT_FILENAME = 'draft-doe-example-protocol-00.txt'
XML_FILENAME = 'draft-doe-example-protocol-00.xml'

# A small draft which is clean apart from its date
TXT_DRAFT = '''\
Network Working Group                                             J. Doe
Internet-Draft                                               Example Inc
Intended status: Standards Track                            4 March 2024
Expires: 5 September 2024


                        An Example Protocol
                    draft-doe-example-protocol-00

Abstract

   This document describes an example protocol.

Status of This Memo

   This Internet-Draft is submitted in full conformance with the
   provisions of BCP 78 and BCP 79.

Copyright Notice

   Copyright (c) 2024 IETF Trust and the persons identified as the
   document authors.  All rights reserved.

Table of Contents

   1.  Introduction  . . . . . . . . . . . . . . . . . . . . . . . .   2
   2.  Security Considerations . . . . . . . . . . . . . . . . . . .   2
   3.  IANA Considerations . . . . . . . . . . . . . . . . . . . . .   2
   4.  Normative References  . . . . . . . . . . . . . . . . . . . .   2
   Author's Address  . . . . . . . . . . . . . . . . . . . . . . . .   3

1.  Introduction

   The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT",
   "SHOULD", "SHOULD NOT", "RECOMMENDED", "NOT RECOMMENDED", "MAY", and
   "OPTIONAL" in this document are to be interpreted as described in
   BCP 14 [RFC2119] [RFC8174] when, and only when, they appear in all
   capitals, as shown here.

   Implementations MUST send a greeting to the server at 192.0.2.1 or
   www.example.com before anything else.

Doe                         Expires 5 September 2024            [Page 1]
\f
Internet-Draft              An Example Protocol               March 2024

2.  Security Considerations

   This document has no security considerations beyond those of the
   underlying transport.

3.  IANA Considerations

   This document has no IANA actions.

4.  Normative References

   [RFC2119]  Bradner, S., "Key words for use in RFCs to Indicate
              Requirement Levels", BCP 14, RFC 2119,
              DOI 10.17487/RFC2119, March 1997,
              <https://www.rfc-editor.org/info/rfc2119>.

   [RFC8174]  Leiba, B., "Ambiguity of Uppercase vs Lowercase in RFC
              2119 Key Words", BCP 14, RFC 8174, DOI 10.17487/RFC8174,
              May 2017, <https://www.rfc-editor.org/info/rfc8174>.

Author's Address

   John Doe
   Example Inc
   Email: jdoe@example.com
'''

# The same draft in xml2rfc v3 format
XML_DRAFT = '''\
<?xml version="1.0" encoding="utf-8"?>
<rfc xmlns:xi="http://www.w3.org/2001/XInclude" category="std"
     docName="draft-doe-example-protocol-00" ipr="trust200902"
     submissionType="IETF" version="3">
  <front>
    <title>An Example Protocol</title>
    <seriesInfo name="Internet-Draft" value="draft-doe-example-protocol-00"/>
    <author fullname="John Doe" initials="J." surname="Doe">
      <organization>Example Inc</organization>
      <address>
        <email>jdoe@example.com</email>
      </address>
    </author>
    <date year="2024" month="March" day="4"/>
    <workgroup>Network Working Group</workgroup>
    <abstract>
      <t>This document describes an example protocol.</t>
    </abstract>
  </front>
  <middle>
    <section anchor="introduction">
      <name>Introduction</name>
      <t>The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT",
      "SHOULD", "SHOULD NOT", "RECOMMENDED", "NOT RECOMMENDED", "MAY", and
      "OPTIONAL" in this document are to be interpreted as described in
      BCP 14 <xref target="RFC2119"/> <xref target="RFC8174"/> when, and
      only when, they appear in all capitals, as shown here.</t>
      <t>Implementations MUST send a greeting to the server at 192.0.2.1 or
      www.example.com before anything else.</t>
    </section>
    <section anchor="security">
      <name>Security Considerations</name>
      <t>This document has no security considerations beyond those of the
      underlying transport.</t>
    </section>
    <section anchor="iana">
      <name>IANA Considerations</name>
      <t>This document has no IANA actions.</t>
    </section>
  </middle>
  <back>
    <references>
      <name>Normative References</name>
      <reference anchor="RFC2119" target="https://www.rfc-editor.org/info/rfc2119">
        <front>
          <title>Key words for use in RFCs to Indicate Requirement Levels</title>
          <author fullname="S. Bradner" initials="S." surname="Bradner"/>
          <date month="March" year="1997"/>
        </front>
        <seriesInfo name="BCP" value="14"/>
        <seriesInfo name="RFC" value="2119"/>
      </reference>
      <xi:include href="https://bib.ietf.org/public/rfc/bibxml/reference.RFC.8174.xml"/>
    </references>
  </back>
</rfc>
'''

def xml_draft(front='', middle='', back='', attrs=None):
    """Build a minimal xml2rfc document from element snippets.  attrs
    replaces the attributes of the <rfc> element."""
    if attrs is None:
        attrs = 'docName="draft-doe-example-protocol-00" ipr="trust200902" category="std"'
    return ('<?xml version="1.0" encoding="utf-8"?>\n'
            '<rfc xmlns:xi="http://www.w3.org/2001/XInclude" %s>\n'
            '<front>\n<title>Test</title>\n%s\n</front>\n'
            '<middle>\n%s\n</middle>\n'
            '<back>\n%s\n</back>\n'
            '</rfc>\n') % (attrs, front, middle, back)

def txt_draft(body, header=None):
    """Build a minimal text draft: a first page header, title and slug,
    followed by the given body."""
    if header is None:
        header = [
            ('Network Working Group', 'J. Doe'),
            ('Internet-Draft', 'Example Inc'),
            ('Intended status: Informational', '4 March 2024'),
            ('Expires: 5 September 2024', ''),
        ]
    lines = [ ('%-40s%32s' % (left, right)).rstrip() for left, right in header ]
    lines += [ '', '', '                        A Test Document', '                    draft-doe-test-document-00', '', ]
    return '\n'.join(lines) + '\n' + body
